from collections import namedtuple
import os
import re
import subprocess
import sys
import time

from .exceptions import ServerCommandError, RootUUIDNotFoundError
from .lib import format_point, yellow

DVID_BIN = os.environ.get("DVID_BIN", "dvid")
DEFAULT_SETTLE_SECONDS = float(os.environ.get("DVID_SETTLE_SECONDS", 3))

# dvid init prints a handful of lines before the UUID,
# give up long before a chatty process could wedge us
MAX_INIT_LINES = 1000

ROOT_UUID_RE = re.compile(r'Root node UUID:\s*(\S+)')

InitResult = namedtuple('InitResult', ('uuid', 'error'))

def run_command(args):
  """
  Run a dvid command to completion.

  Raises ServerCommandError if the command cannot be
  executed or exits with a non-zero status.

  Returns: stdout as a string
  """
  args = [ str(arg) for arg in args ]
  try:
    proc = subprocess.run(
      args, stdout=subprocess.PIPE, stderr=subprocess.PIPE,
      universal_newlines=True,
    )
  except OSError as err:
    raise ServerCommandError(args, stderr=str(err))

  if proc.returncode != 0:
    raise ServerCommandError(args, proc.returncode, proc.stderr)

  return proc.stdout

def scan_root_uuid(lines, max_lines=MAX_INIT_LINES):
  """
  Scan the output of dvid init for the line

    Root node UUID: <uuid>

  The first match wins. Stops at the end of the stream
  or after max_lines lines, whichever comes first.

  Returns: InitResult(uuid, error), exactly one of which is None
  """
  count = 0
  for line in lines:
    if isinstance(line, bytes):
      line = line.decode('utf8', errors='replace')

    match = ROOT_UUID_RE.search(line)
    if match:
      return InitResult(match.group(1), None)

    count += 1
    if count >= max_lines:
      return InitResult(None,
        "Did not detect root version UUID in the first {} lines of output of dvid init!".format(max_lines)
      )

  return InitResult(None, "Did not detect root version UUID in output of dvid init!")

class DvidClient(object):
  """Issues commands to a running dvid server via its CLI."""
  def __init__(self, executable=DVID_BIN, runner=run_command, echo=print):
    self.executable = executable
    self.runner = runner
    self.echo = echo

  def command(self, *args):
    out = self.runner([ self.executable ] + list(args))
    if out and out.strip():
      self.echo(out.rstrip())
    return out

  def create_dataset(self, name, typename):
    return self.command('dataset', name, typename)

  def add_tile(self, dataset, uuid, offset, path):
    """
    Import one tile into dataset at the given version.

    offset: (x,y,z) absolute voxel coordinate of the tile's corner
    path: image file for dvid to read
    """
    return self.command(dataset, 'server-add', uuid, format_point(offset), path)

  def shutdown(self):
    return self.command('shutdown')

class DvidServer(object):
  """
  Creates a fresh datastore, runs a server against it in
  the background, and shuts it down again.

  Required:
    client: DvidClient used for commands after startup
    datastore: output directory of the datastore
  Optional:
    config: volume configuration JSON passed to dvid init
    datastore_flag: use "-datastore=<dir> init" instead of
      "init config=<cfg> dir=<dir>"
    settle_seconds: wait this long after starting the server
      since it offers no readiness signal
  """
  def __init__(
    self, client, datastore, config=None,
    datastore_flag=False, settle_seconds=DEFAULT_SETTLE_SECONDS,
    popen=subprocess.Popen, sleep=time.sleep
  ):
    self.client = client
    self.datastore = datastore
    self.config = config
    self.datastore_flag = datastore_flag
    self.settle_seconds = settle_seconds

    self._popen = popen
    self._sleep = sleep
    self._init_proc = None
    self._serve_proc = None
    self._shutdown = False

  @property
  def executable(self):
    return self.client.executable

  def init_args(self):
    if self.datastore_flag:
      return [ self.executable, '-datastore=' + self.datastore, 'init' ]

    args = [ self.executable, 'init' ]
    if self.config:
      args.append('config=' + self.config)
    args.append('dir=' + self.datastore)
    return args

  def serve_args(self):
    if self.datastore_flag:
      return [ self.executable, '-datastore=' + self.datastore, 'serve' ]
    return [ self.executable, 'serve', 'dir=' + self.datastore ]

  def _spawn(self, args, **kwargs):
    try:
      return self._popen(args, **kwargs)
    except OSError as err:
      raise ServerCommandError(args, stderr=str(err))

  def init(self):
    """
    Create the datastore.

    Returns: root version UUID
    """
    args = self.init_args()
    proc = self._spawn(args, stdout=subprocess.PIPE, universal_newlines=True)
    self._init_proc = proc

    result = scan_root_uuid(proc.stdout)
    if result.error:
      self._reap(proc)
      raise RootUUIDNotFoundError(result.error)

    return result.uuid

  def serve(self):
    """
    Start the server in the background. It runs in its own
    session so a ^C aimed at us doesn't kill it before
    we get the chance to shut it down.
    """
    self._serve_proc = self._spawn(
      self.serve_args(),
      stdout=subprocess.DEVNULL,
      start_new_session=True,
    )
    self.client.echo("Making sure DVID server has started...")
    self._sleep(self.settle_seconds)
    return self._serve_proc

  @property
  def stopped(self):
    return self._shutdown

  def shutdown(self, strict=True):
    """
    Stop the server. Only the first call does anything,
    later calls return False.

    strict: if False, a failed shutdown command is reported
      as a warning rather than raised. Used during cleanup
      when the server may already be gone.

    Returns: True if this call issued the shutdown
    """
    if self._shutdown:
      return False
    self._shutdown = True

    try:
      self.client.shutdown()
    except ServerCommandError as err:
      if strict:
        raise
      print(yellow("Unable to shut down dvid cleanly: {}".format(err)), file=sys.stderr)
    finally:
      self._reap(self._serve_proc)
      self._reap(self._init_proc)

    return True

  def _reap(self, proc, timeout=10):
    if proc is None or proc.poll() is not None:
      return

    try:
      proc.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
      proc.terminate()
      proc.wait()
