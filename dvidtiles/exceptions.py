class DvidTilesError(Exception):
  """Base class for import failures that should end the run."""
  pass

class CoordinateParseError(DvidTilesError, ValueError):
  """Unable to interpret a "x,y,z" style coordinate string."""
  pass

class VolumeConfigError(DvidTilesError):
  """The volume configuration file is missing, unreadable, or malformed."""
  pass

class ServerCommandError(DvidTilesError):
  """
  A dvid command could not be executed or 
  exited with a non-zero status.
  """
  def __init__(self, args, returncode=None, stderr=''):
    self.args_list = list(args)
    self.returncode = returncode
    self.stderr = (stderr or '').strip()

    if returncode is None:
      msg = "Unable to execute `{}`".format(' '.join(self.args_list))
    else:
      msg = "`{}` exited with status {}".format(' '.join(self.args_list), returncode)

    if self.stderr:
      msg += ": " + self.stderr

    super(ServerCommandError, self).__init__(msg)

class RootUUIDNotFoundError(DvidTilesError):
  """dvid init finished without reporting a root version UUID."""
  pass
