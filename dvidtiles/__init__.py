"""
Import tiled microscopy volumes into DVID.

  https://github.com/janelia-flyem/dvid

DVID is a versioned voxel storage server. dvidtiles does
none of the storage work itself: it resolves which image
tiles cover a region of a volume and adds them one at a
time by driving the dvid command line, e.g.

  dvid grayscale server-add <uuid> 0,1024,12 /tiles/1024/0/1/0/g/012.png

Two tile layouts are understood. Raveler tile trees are
added to a dataset on a server that is already running.
VoxelProof directories are turned into a brand new
datastore: dvidtiles initializes it, starts a server,
creates "grayscale" and "labels" datasets, adds every
tile, and shuts the server down again.

Example:

  from dvidtiles import Bbox, DvidClient, raveler_plan, run_imports

  client = DvidClient('dvid')
  bbox = Bbox.from_delta((0,0,100), (2048,2048,10))
  plan = raveler_plan('/data/tiles', 'mydata', bbox, grayscale=True)
  run_imports(client, 'c7b2', plan)

The same operations are available from the shell:

  dvidtiles raveler c7b2 mydata /data/tiles 0,0,100 2048,2048,10 -g
"""

from .lib import Bbox, Vec, parse_point, format_point
from .tiling import TileGrid, tile_bounds
from .paths import raveler_tile_path, voxelproof_tile_path
from .server import DvidClient, DvidServer, scan_root_uuid
from .volume import VolumeConfig
from .importer import (
  raveler_plan, voxelproof_plan, run_imports,
  import_raveler, import_voxelproof,
)
from .exceptions import (
  DvidTilesError, CoordinateParseError, VolumeConfigError,
  ServerCommandError, RootUUIDNotFoundError
)

from . import exceptions

__version__ = '1.0.0'
