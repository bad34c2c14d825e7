import pytest

import numpy as np

import dvidtiles.lib as lib
from dvidtiles.lib import Bbox, Vec
from dvidtiles.exceptions import CoordinateParseError

def test_parse_point():
  assert lib.parse_point("0,128,64") == (0, 128, 64)
  assert lib.parse_point(" 1, 2 ,3 ") == (1, 2, 3)
  assert lib.parse_point("100,100", 2) == (100, 100)
  assert lib.parse_point("-5,0,7") == (-5, 0, 7)

  bad = ( "", "1,2", "1,2,3,4", "a,b,c", "1.5,2,3", "1,,3", "1,2,", None )
  for text in bad:
    try:
      lib.parse_point(text, 3)
      assert False, text
    except CoordinateParseError:
      pass

  with pytest.raises(ValueError):
    lib.parse_point("0,619,1", 2)

def test_format_point():
  assert lib.format_point((0, 1024, 12)) == "0,1024,12"
  assert lib.format_point(Vec(3,4,5)) == "3,4,5"
  assert lib.format_point((np.int64(7), np.int32(8), 9)) == "7,8,9"

def test_nvl():
  assert lib.nvl(None, None, 3, 4) == 3
  assert lib.nvl(0, 1) == 0
  assert lib.nvl(None) is None

def test_colorize():
  assert lib.red("x") == "\033[1;91mx\033[m"
  assert lib.yellow("x").startswith("\033[1;93m")
  assert lib.green("x").endswith("\033[m")

def test_vec_accessors():
  vec = Vec(1,2,3)
  assert vec.x == 1 and vec.y == 2 and vec.z == 3
  vec.z = 10
  assert vec.tolist() == [1,2,10]

def test_bbox_from_delta():
  bbox = Bbox.from_delta((100, 200, 10), (50, 60, 5))
  assert bbox.minpt.tolist() == [100, 200, 10]
  assert bbox.maxpt.tolist() == [150, 260, 15]

def test_bbox_orders_corners():
  bbox = Bbox( (10,0,5), (0,10,1) )
  assert bbox == Bbox( (0,0,1), (10,10,5) )
  assert bbox != Bbox( (0,0,0), (10,10,5) )

def test_bbox_from_extent():
  bbox = Bbox.from_extent((700, 700, 620))
  assert bbox == Bbox( (0,0,0), (699,699,619) )

  with pytest.raises(ValueError):
    Bbox.from_extent((700, 0, 620))

def test_bbox_repr():
  assert repr(Bbox( (0,1,2), (3,4,5) )) == "Bbox([0, 1, 2],[3, 4, 5])"
  assert Bbox( (0,1,2), (3,4,5) ).to_list() == [0,1,2,3,4,5]
