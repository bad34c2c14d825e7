from collections import namedtuple, OrderedDict
from contextlib import contextmanager
from itertools import chain
import os
import signal
import threading

from tqdm import tqdm

from .exceptions import ServerCommandError
from .lib import Bbox, nvl, yellow
from .paths import (
  GRAYSCALE, SUPERPIXEL, LABELS, RAVELER_TILE_SIZE,
  raveler_tile_path, voxelproof_tile_path,
)
from .tiling import TileGrid, zrange

GRAYSCALE_DATASET = ('grayscale', 'grayscale8')
LABELS_DATASET = ('labels', 'labels32')

TileImport = namedtuple('TileImport', ('dataset', 'kind', 'z', 'offset', 'path'))
ImportSummary = namedtuple('ImportSummary', ('tiles', 'interrupted'))

RavelerImport = namedtuple('RavelerImport', (
  'uuid', 'dataset', 'tiles_dir', 'offset', 'size',
  'superpixels', 'grayscale', 'progress',
))

VoxelProofImport = namedtuple('VoxelProofImport', (
  'source_dir', 'zrange', 'tile_size', 'datastore', 'config', 'progress',
))

def raveler_plan(tiles_dir, dataset, bbox, superpixels=False, grayscale=False):
  """
  Plan the imports for every Raveler tile intersecting bbox.
  Within each tile the superpixel import precedes grayscale.

  Offsets keep the absolute z of the slice.

  Returns: generator of TileImport
  """
  grid = TileGrid.from_bbox(bbox, (RAVELER_TILE_SIZE, RAVELER_TILE_SIZE))
  kinds = []
  if superpixels:
    kinds.append(SUPERPIXEL)
  if grayscale:
    kinds.append(GRAYSCALE)

  for z in zrange(bbox.minpt.z, bbox.maxpt.z):
    for row, col in grid.tiles():
      ox, oy = grid.tile_offset(row, col)
      for kind in kinds:
        path = os.path.join(tiles_dir, raveler_tile_path(row, col, z, kind))
        yield TileImport(dataset, kind, z, (ox, oy, z), path)

def voxelproof_plan(source_dir, dataset, kind, zmin, zmax, tile_size, bounds):
  """
  Plan the imports of one kind of VoxelProof tile
  covering bounds for slices zmin to zmax.

  The datastore starts at slice zmin, so the z
  component of each offset is z - zmin.

  Returns: generator of TileImport
  """
  grid = TileGrid.from_bbox(bounds, tile_size)
  for z in zrange(zmin, zmax):
    for row, col in grid.tiles():
      ox, oy = grid.tile_offset(row, col)
      path = voxelproof_tile_path(source_dir, row, col, z, kind)
      yield TileImport(dataset, kind, z, (ox, oy, z - zmin), path)

def run_imports(client, uuid, plan, cancel=None, progress=False, total=None):
  """
  Import each planned tile with one blocking dvid call,
  in plan order.

  The first failure is raised immediately. Nothing after
  it is attempted.

  If cancel (a threading.Event) is set, stop before the
  next tile. A command that fails after cancel was set was
  most likely killed by the same interrupt and is not
  treated as an error.

  Returns: ImportSummary(tiles, interrupted)
  """
  counts = OrderedDict()
  current_z = None
  tiles = 0
  interrupted = False

  def report(z):
    for (dataset, kind), n in counts.items():
      tqdm.write("Added {} {} tiles to {} from z = {}...".format(n, kind, dataset, z))
    counts.clear()

  pbar = tqdm(plan, total=total, desc="Importing Tiles", disable=(not progress))
  try:
    for tile in pbar:
      if cancel is not None and cancel.is_set():
        interrupted = True
        break

      if tile.z != current_z:
        if current_z is not None:
          report(current_z)
        current_z = tile.z

      try:
        client.add_tile(tile.dataset, uuid, tile.offset, tile.path)
      except ServerCommandError:
        if cancel is not None and cancel.is_set():
          interrupted = True
          break
        raise

      tiles += 1
      key = (tile.dataset, tile.kind)
      counts[key] = counts.get(key, 0) + 1
  finally:
    pbar.close()

  if current_z is not None:
    report(current_z)

  return ImportSummary(tiles, interrupted)

@contextmanager
def cancel_on_interrupt(cancel):
  """
  Within this context, SIGINT and SIGTERM set the cancel
  event instead of raising KeyboardInterrupt so the import
  loop can stop between tiles and shut the server down.
  """
  def handler(signum, frame):
    if not cancel.is_set():
      print(yellow("\nInterrupted. Finishing current tile and shutting down..."))
    cancel.set()

  prevsigint = signal.getsignal(signal.SIGINT)
  prevsigterm = signal.getsignal(signal.SIGTERM)

  signal.signal(signal.SIGINT, handler)
  signal.signal(signal.SIGTERM, handler)
  try:
    yield cancel
  finally:
    signal.signal(signal.SIGINT, prevsigint)
    signal.signal(signal.SIGTERM, prevsigterm)

def import_raveler(config, client):
  """
  Add Raveler tiles to a dataset on an already
  running server at an existing version.

  Returns: ImportSummary
  """
  bbox = Bbox.from_delta(config.offset, config.size)
  plan = raveler_plan(
    config.tiles_dir, config.dataset, bbox,
    superpixels=config.superpixels, grayscale=config.grayscale,
  )
  grid = TileGrid.from_bbox(bbox, (RAVELER_TILE_SIZE, RAVELER_TILE_SIZE))
  nkinds = int(bool(config.superpixels)) + int(bool(config.grayscale))
  total = grid.num_tiles() * len(zrange(bbox.minpt.z, bbox.maxpt.z)) * nkinds

  return run_imports(client, config.uuid, plan, progress=config.progress, total=total)

def import_voxelproof(config, server, bounds, cancel=None):
  """
  Build a new datastore from a VoxelProof directory.

  Initializes the datastore, starts a server, creates the
  grayscale and labels datasets, imports all grayscale then
  all label tiles, and shuts the server down. The server is
  shut down exactly once whether the import completes,
  fails, or is interrupted.

  Required:
    config: VoxelProofImport
    server: DvidServer for config.datastore
    bounds: Bbox of the volume, which sets the tile grid
  Optional:
    cancel: threading.Event checked after startup and between tiles

  Returns: (uuid, ImportSummary)
  """
  cancel = nvl(cancel, threading.Event())
  zmin, zmax = config.zrange

  def stop_early():
    server.shutdown(strict=False)
    return uuid, ImportSummary(0, True)

  uuid = server.init()
  server.client.echo("Initialized datastore with root version {}.".format(uuid))

  server.serve()
  try:
    if cancel.is_set():
      return stop_early()

    try:
      server.client.create_dataset(*GRAYSCALE_DATASET)
      server.client.create_dataset(*LABELS_DATASET)
    except ServerCommandError:
      if cancel.is_set():
        return stop_early()
      raise

    grid = TileGrid.from_bbox(bounds, config.tile_size)
    cols, rows = grid.shape()
    server.client.echo("X Tiles from [{},{}], Y Tiles from [{},{}]".format(
      grid.start[0], grid.end[0], grid.start[1], grid.end[1]
    ))

    plan = chain(
      voxelproof_plan(config.source_dir, GRAYSCALE_DATASET[0], GRAYSCALE, zmin, zmax, config.tile_size, bounds),
      voxelproof_plan(config.source_dir, LABELS_DATASET[0], LABELS, zmin, zmax, config.tile_size, bounds),
    )
    total = 2 * cols * rows * len(zrange(zmin, zmax))
    summary = run_imports(
      server.client, uuid, plan,
      cancel=cancel, progress=config.progress, total=total
    )
  except BaseException:
    server.shutdown(strict=False)
    raise

  server.shutdown(strict=(not summary.interrupted))
  return uuid, summary
