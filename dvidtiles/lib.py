import os
import re

import numpy as np

from .exceptions import CoordinateParseError

COLORS = {
  'RESET': "\033[m",
  'YELLOW': "\033[1;93m",
  'RED': '\033[1;91m',
  'GREEN': '\033[1;92m',
}

POINT_RE = re.compile(r'^\s*-?\d+\s*(?:,\s*-?\d+\s*)*$')

def nvl(*args):
  for arg in args:
    if arg is not None:
      return arg
  return None

def green(text):
  return colorize('green', text)

def yellow(text):
  return colorize('yellow', text)

def red(text):
  return colorize('red', text)

def colorize(color, text):
  color = color.upper()
  return COLORS[color] + text + COLORS['RESET']

def toabs(path):
  path = os.path.expanduser(path)
  return os.path.abspath(path)

def parse_point(text, ndim=3):
  """
  Parse a comma delimited integer point such as
  "0,128,64" or "100,100".

  Required:
    text: (str) the point as typed on the command line
    ndim: (int) number of components expected

  Raises CoordinateParseError if the string is malformed
  or has the wrong number of components.

  Returns: tuple of ints
  """
  if not isinstance(text, str) or not POINT_RE.match(text):
    raise CoordinateParseError(
      "'{}' is not a comma delimited list of {} integers.".format(text, ndim)
    )

  point = tuple(int(x) for x in text.split(','))
  if len(point) != ndim:
    raise CoordinateParseError(
      "'{}' has {} components but {} were expected.".format(text, len(point), ndim)
    )
  return point

def format_point(pt):
  """Renders a point as the "x,y,z" string dvid expects."""
  return ','.join(str(int(x)) for x in pt)

class Vec(np.ndarray):
    def __new__(cls, *args, **kwargs):
      dtype = kwargs['dtype'] if 'dtype' in kwargs else int
      return super(Vec, cls).__new__(cls, shape=(len(args),), buffer=np.array(args).astype(dtype), dtype=dtype)

    def __hash__(self):
      return hash(tuple(self.tolist()))

    def __repr__(self):
      values = ",".join([ str(x) for x in self ])
      return f"Vec({values}, dtype={self.dtype})"

def __assign(self, val, index):
  self[index] = val

Vec.x = property(lambda self: self[0], lambda self,val: __assign(self,val,0))
Vec.y = property(lambda self: self[1], lambda self,val: __assign(self,val,1))
Vec.z = property(lambda self: self[2], lambda self,val: __assign(self,val,2))

class Bbox(object):
  """
  Represents a range of voxels in space.

  Unlike a half-open interval, maxpt is the
  endpoint of the range and is part of it.
  e.g. a z range of "10,12" covers slices 10, 11, and 12.
  """
  __slots__ = [ 'minpt', 'maxpt' ]

  def __init__(self, a, b):
    self.minpt = Vec(*[ min(ai,bi) for ai,bi in zip(a,b) ])
    self.maxpt = Vec(*[ max(ai,bi) for ai,bi in zip(a,b) ])

  @classmethod
  def from_delta(cls, minpt, plus):
    return Bbox( minpt, Vec(*minpt) + Vec(*plus) )

  @classmethod
  def from_extent(cls, extent):
    """
    A volume of extent (700,700,620) starts at the origin
    and ends on voxel (699,699,619).
    """
    extent = Vec(*extent)
    if np.any(extent <= 0):
      raise ValueError("Volume extent must be positive. Got: {}".format(list(extent)))
    return Bbox( Vec(*([0] * len(extent))), extent - 1 )

  def to_list(self):
    return self.minpt.tolist() + self.maxpt.tolist()

  def __ne__(self, other):
    return not (self == other)

  def __eq__(self, other):
    return np.array_equal(self.minpt, other.minpt) and np.array_equal(self.maxpt, other.maxpt)

  def __hash__(self):
    return hash(tuple(self.to_list()))

  def __repr__(self):
    return f"Bbox({self.minpt.tolist()},{self.maxpt.tolist()})"
