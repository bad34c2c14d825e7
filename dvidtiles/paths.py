"""
Resolve the on-disk location of a tile.

Raveler tile directories are arranged as:

  /tiles
    /1024
      /0
        /<row>
          /<col>
            /g
              <z>.png   (z < 1000, zero padded to 3 digits)
              /1000
                <z>.png (1000 <= z < 2000)
              /2000
                <z>.png
            /s
              ...       (same arrangement for superpixels)

VoxelProof data directories are arranged as:

  /medulla_testing_runlash4
    /comps
      /z
        /<z>
          <row>-<col>.png   (labels)
    /z
      /<z>
        <row>-<col>.jpg     (grayscale)

The "comps" label tiles might be larger than the
grayscale tiles if more than 8 bits are needed.

Nothing here touches the filesystem. Whether a
file exists is discovered by dvid when it is imported.
"""
import os
import posixpath

GRAYSCALE = 'grayscale'
SUPERPIXEL = 'superpixel'
LABELS = 'labels'

RAVELER_TILE_SIZE = 1024
RAVELER_BUCKET_SIZE = 1000

RAVELER_KIND_DIRS = {
  GRAYSCALE: 'g',
  SUPERPIXEL: 's',
}

def raveler_tile_path(row, col, z, kind, tile_size=RAVELER_TILE_SIZE):
  """
  Path of a Raveler tile relative to the tiles directory.

  e.g. raveler_tile_path(2, 3, 1500, GRAYSCALE)
    >>> '1024/0/2/3/g/1000/1500.png'

  raveler_tile_path(2, 3, 42, SUPERPIXEL)
    >>> '1024/0/2/3/s/042.png'
  """
  try:
    typedir = RAVELER_KIND_DIRS[kind]
  except KeyError:
    raise ValueError("Raveler tiles are grayscale or superpixel. Got: {}".format(kind))

  row, col, z = int(row), int(col), int(z)

  if z >= RAVELER_BUCKET_SIZE:
    bucket = (z // RAVELER_BUCKET_SIZE) * RAVELER_BUCKET_SIZE
    return posixpath.join(
      str(tile_size), '0', str(row), str(col), typedir, str(bucket), "{}.png".format(z)
    )

  return posixpath.join(
    str(tile_size), '0', str(row), str(col), typedir, "{:03d}.png".format(z)
  )

def voxelproof_tile_path(root, row, col, z, kind):
  """
  Path of a VoxelProof tile.

  e.g. voxelproof_tile_path('/data', 1, 4, 10, GRAYSCALE)
    >>> '/data/z/10/1-4.jpg'

  voxelproof_tile_path('/data', 1, 4, 10, LABELS)
    >>> '/data/comps/z/10/1-4.png'
  """
  row, col, z = int(row), int(col), int(z)

  if kind == GRAYSCALE:
    return os.path.join(root, 'z', str(z), "{}-{}.jpg".format(row, col))
  elif kind == LABELS:
    return os.path.join(root, 'comps', 'z', str(z), "{}-{}.png".format(row, col))

  raise ValueError("VoxelProof tiles are grayscale or labels. Got: {}".format(kind))
