import sys
import threading

import click

from .exceptions import DvidTilesError, CoordinateParseError
from .importer import (
  RavelerImport, VoxelProofImport,
  import_raveler, import_voxelproof, cancel_on_interrupt,
)
from .lib import parse_point, red, green, toabs
from .server import DvidClient, DvidServer, DVID_BIN
from .volume import VolumeConfig, FIXED_VOLUME_EXTENT

CONTEXT_SETTINGS = dict(help_option_names=[ '-h', '-help', '--help' ])

class TupleN(click.ParamType):
  """A command line argument consisting of N comma-separated integers."""
  def __init__(self, ndim, name):
    self.ndim = ndim
    self.name = name

  def convert(self, value, param, ctx):
    if isinstance(value, str):
      try:
        value = parse_point(value, self.ndim)
      except CoordinateParseError as err:
        self.fail(str(err), param, ctx)
    return value

Tuple3 = TupleN(3, 'x,y,z')
Tuple2 = TupleN(2, 'a,b')

def fatal(err):
  print(red("dvidtiles: {}".format(err)), file=sys.stderr)
  sys.exit(1)

def check_zrange(ctx, param, value):
  if value is not None and value[0] < 0:
    raise click.BadParameter("zmin must not be negative. Got: {},{}".format(*value))
  if value is not None and value[0] > value[1]:
    raise click.BadParameter("zmin must not exceed zmax. Got: {},{}".format(*value))
  return value

def check_tile_size(ctx, param, value):
  if value is not None and min(value) <= 0:
    raise click.BadParameter("Tile size must be positive. Got: {},{}".format(*value))
  return value

def check_offset(ctx, param, value):
  if value is not None and min(value) < 0:
    raise click.BadParameter("Offset must not be negative. Got: {},{},{}".format(*value))
  return value

def check_size(ctx, param, value):
  if value is not None and min(value) < 0:
    raise click.BadParameter("Size must not be negative. Got: {},{},{}".format(*value))
  return value

@click.group(context_settings=CONTEXT_SETTINGS)
@click.option('--dvid', default=DVID_BIN, show_default=True, help="dvid executable to drive. Also set by $DVID_BIN.")
@click.option('--progress/--no-progress', default=False, help="Display a progress bar over all tiles.")
@click.pass_context
def main(ctx, dvid, progress):
  """
  Import tiled image volumes into DVID.

  Each tile is added with one blocking
  "dvid <dataset> server-add" call. Any
  failed call ends the import.
  """
  ctx.ensure_object(dict)
  ctx.obj["dvid"] = dvid
  ctx.obj["progress"] = progress

@main.command("raveler", context_settings=CONTEXT_SETTINGS)
@click.argument("uuid")
@click.argument("dataset")
@click.argument("tiles_dir", type=click.Path(file_okay=False))
@click.argument("offset", type=Tuple3, callback=check_offset)
@click.argument("size", type=Tuple3, callback=check_size)
@click.option('-s', '-superpixels', '--superpixels', 'superpixels', is_flag=True, default=False, help="Load only superpixel tiles.")
@click.option('-g', '-grayscale', '--grayscale', 'grayscale', is_flag=True, default=False, help="Load only grayscale tiles.")
@click.pass_context
def raveler(ctx, uuid, dataset, tiles_dir, offset, size, superpixels, grayscale):
  """
  Add Raveler tiles to a dataset on a running server.

  UUID is the version to add to. OFFSET and SIZE
  ("x,y,z") select the voxels to import. Tiles are
  1024x1024 and laid out as

    TILES_DIR/1024/0/<row>/<col>/{g,s}/[<bucket>/]<z>.png

  Loads both superpixels and grayscale unless -s or -g
  restricts it to one of them. Note that giving neither
  flag loads both kinds rather than nothing.
  """
  tiles_dir = toabs(tiles_dir)
  if not (superpixels or grayscale):
    superpixels = grayscale = True

  print("Tiles directory:", tiles_dir)
  print("Offset: ({},{},{})".format(*offset))
  print("Size: ({},{},{})".format(*size))

  config = RavelerImport(
    uuid=uuid, dataset=dataset, tiles_dir=tiles_dir,
    offset=offset, size=size,
    superpixels=superpixels, grayscale=grayscale,
    progress=ctx.obj["progress"],
  )
  client = DvidClient(ctx.obj["dvid"])

  try:
    summary = import_raveler(config, client)
  except DvidTilesError as err:
    fatal(err)

  print(green("Added {} tiles to {}.".format(summary.tiles, dataset)))

def print_voxelproof_inputs(source_dir, zrange, tile_size, datastore):
  print("VoxelProof data directory:", source_dir)
  print("Z range {} -> {}".format(*zrange))
  print("Tile size: {} x {} pixels".format(*tile_size))
  print("Output DVID database:", datastore)

def run_voxelproof(config, server, bounds, cancel=None):
  try:
    uuid, summary = import_voxelproof(config, server, bounds, cancel=cancel)
  except DvidTilesError as err:
    fatal(err)

  if summary.interrupted:
    print("Interrupted after {} tiles. Server shut down.".format(summary.tiles))
  else:
    print(green("Imported {} tiles into version {}.".format(summary.tiles, uuid)))

@main.command("voxelproof", context_settings=CONTEXT_SETTINGS)
@click.argument("source_dir", type=click.Path(file_okay=False))
@click.argument("zrange", type=Tuple2, callback=check_zrange)
@click.argument("tile_size", type=Tuple2, callback=check_tile_size)
@click.argument("config_path", type=click.Path(dir_okay=False))
@click.argument("datastore", type=click.Path(file_okay=False))
@click.pass_context
def voxelproof(ctx, source_dir, zrange, tile_size, config_path, datastore):
  """
  Create a DVID datastore from a VoxelProof directory.

  \b
  SOURCE_DIR   VoxelProof data directory.
  ZRANGE       Slices to import as "zmin,zmax", e.g. "0,619".
  TILE_SIZE    Tile size as "width,height", e.g. "100,100".
  CONFIG_PATH  Volume configuration JSON passed to "dvid init".
  DATASTORE    Output DVID datastore directory to create.
  """
  source_dir, datastore, config_path = toabs(source_dir), toabs(datastore), toabs(config_path)
  print_voxelproof_inputs(source_dir, zrange, tile_size, datastore)
  print("Configuration JSON file:", config_path)

  try:
    volume = VolumeConfig.from_file(config_path)
  except DvidTilesError as err:
    fatal(err)

  config = VoxelProofImport(
    source_dir=source_dir, zrange=zrange, tile_size=tile_size,
    datastore=datastore, config=config_path, progress=ctx.obj["progress"],
  )
  server = DvidServer(DvidClient(ctx.obj["dvid"]), datastore, config=config_path)
  run_voxelproof(config, server, volume.bounds())

@main.command("voxelproof-fixed", context_settings=CONTEXT_SETTINGS)
@click.argument("source_dir", type=click.Path(file_okay=False))
@click.argument("zrange", type=Tuple2, callback=check_zrange)
@click.argument("tile_size", type=Tuple2, callback=check_tile_size)
@click.argument("datastore", type=click.Path(file_okay=False))
@click.pass_context
def voxelproof_fixed(ctx, source_dir, zrange, tile_size, datastore):
  """
  Create a DVID datastore from the 700x700x620
  VoxelProof medulla volume.

  ^C stops the import between tiles, shuts the
  server down, and exits cleanly.

  \b
  SOURCE_DIR   VoxelProof data directory.
  ZRANGE       Slices to import as "zmin,zmax", e.g. "0,619".
  TILE_SIZE    Tile size as "width,height", e.g. "100,100".
  DATASTORE    Output DVID datastore directory to create.
  """
  source_dir, datastore = toabs(source_dir), toabs(datastore)
  print_voxelproof_inputs(source_dir, zrange, tile_size, datastore)

  volume = VolumeConfig.from_extent(FIXED_VOLUME_EXTENT)
  config = VoxelProofImport(
    source_dir=source_dir, zrange=zrange, tile_size=tile_size,
    datastore=datastore, config=None, progress=ctx.obj["progress"],
  )
  server = DvidServer(DvidClient(ctx.obj["dvid"]), datastore, datastore_flag=True)

  with cancel_on_interrupt(threading.Event()) as cancel:
    run_voxelproof(config, server, volume.bounds(), cancel=cancel)
