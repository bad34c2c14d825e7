from collections import namedtuple
from itertools import product

import numpy as np

from .lib import Vec

def zrange(zmin, zmax):
  """Iterate z slices from zmin to zmax inclusive."""
  return range(int(zmin), int(zmax) + 1)

def tile_bounds(minpt, maxpt, tile_size):
  """
  Compute the inclusive range of tile indices that
  intersect a voxel range on each horizontal axis.

  A tile index is floor(v / T), so a range narrower
  than one tile still produces the single tile
  covering it.

  Required:
    minpt: (x,y,...) first voxel of the range
    maxpt: (x,y,...) last voxel of the range
    tile_size: (Tx,Ty) tile edge length on each axis

  Returns: (start, end) as Vecs of (column, row) indices
  """
  tile_size = Vec(*tile_size)
  if np.any(tile_size <= 0):
    raise ValueError("Tile size must be positive. Got: {}".format(tile_size.tolist()))

  ndim = len(tile_size)
  start = Vec(*minpt[:ndim]) // tile_size
  end = Vec(*maxpt[:ndim]) // tile_size
  return start, end

class TileGrid(namedtuple('TileGrid', ('tile_size', 'start', 'end'))):
  """
  The set of tiles covering a voxel range, with
  start and end holding the first and last (column, row)
  tile indices. Both ends are included.
  """
  __slots__ = ()

  @classmethod
  def from_bbox(cls, bbox, tile_size):
    start, end = tile_bounds(bbox.minpt, bbox.maxpt, tile_size)
    return TileGrid(
      tuple(int(x) for x in tile_size),
      tuple(int(x) for x in start),
      tuple(int(x) for x in end),
    )

  def columns(self):
    return range(self.start[0], self.end[0] + 1)

  def rows(self):
    return range(self.start[1], self.end[1] + 1)

  def shape(self):
    """Returns: (number of columns, number of rows)"""
    return (len(self.columns()), len(self.rows()))

  def num_tiles(self):
    cols, rows = self.shape()
    return cols * rows

  def tiles(self):
    """Yields (row, col) with rows in the outer loop."""
    return product(self.rows(), self.columns())

  def tile_offset(self, row, col):
    """Voxel coordinate (x,y) of the upper left corner of a tile."""
    return (col * self.tile_size[0], row * self.tile_size[1])

