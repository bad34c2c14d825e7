import os
import signal

from dvidtiles.exceptions import ServerCommandError

class FakeClient(object):
  """Records dvid commands instead of running them."""
  executable = 'dvid'

  def __init__(self, fail_at=None, interrupt=None, interrupt_at=None, fail_when_interrupted=False, on_dataset=None):
    self.tiles = []
    self.datasets = []
    self.shutdowns = 0
    self.messages = []
    self.fail_at = fail_at
    self.interrupt = interrupt
    self.interrupt_at = interrupt_at
    self.fail_when_interrupted = fail_when_interrupted
    self.on_dataset = on_dataset

  def echo(self, msg):
    self.messages.append(msg)

  def create_dataset(self, name, typename):
    if self.on_dataset is not None:
      self.on_dataset(name, typename)
    self.datasets.append((name, typename))

  def add_tile(self, dataset, uuid, offset, path):
    index = len(self.tiles)
    if self.fail_at is not None and index == self.fail_at:
      raise ServerCommandError([ 'dvid', dataset, 'server-add' ], 1, 'no such file')

    self.tiles.append((dataset, uuid, tuple(int(x) for x in offset), path))

    if self.interrupt_at is not None and len(self.tiles) == self.interrupt_at:
      self.interrupt()
      if self.fail_when_interrupted:
        raise ServerCommandError([ 'dvid', dataset, 'server-add' ], -2, 'interrupted')

  def shutdown(self):
    self.shutdowns += 1

class FakeServer(object):
  """Stands in for DvidServer, recording the lifecycle."""
  def __init__(self, client, datastore='/tmp/db', config=None, datastore_flag=False, uuid='abc123', on_serve=None):
    self.client = client
    self.datastore = datastore
    self.config = config
    self.datastore_flag = datastore_flag
    self.uuid = uuid
    self.on_serve = on_serve
    self.events = []
    self.stopped = False

  def init(self):
    self.events.append('init')
    return self.uuid

  def serve(self):
    self.events.append('serve')
    if self.on_serve is not None:
      self.on_serve()

  def shutdown(self, strict=True):
    if self.stopped:
      return False
    self.stopped = True
    self.events.append(('shutdown', strict))
    self.client.shutdown()
    return True

def interrupt_self():
  """Deliver a real SIGINT to this process, as ^C would."""
  os.kill(os.getpid(), signal.SIGINT)
