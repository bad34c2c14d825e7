import pytest

import json

from dvidtiles.exceptions import VolumeConfigError
from dvidtiles.lib import Bbox
from dvidtiles.volume import VolumeConfig, FIXED_VOLUME_EXTENT

def test_from_file(tmp_path):
  path = tmp_path / 'volume.json'
  path.write_text(json.dumps({
    "VolumeMax": [ 700, 700, 620 ],
    "VoxelRes": [ 10.0, 10.0, 10.0 ],
    "VoxelResUnits": "nanometers",
    "BlockMax": [ 16, 16, 16 ],
  }))

  config = VolumeConfig.from_file(str(path))
  assert config.volume_max == (700, 700, 620)
  assert config['VoxelResUnits'] == 'nanometers'
  assert config.bounds() == Bbox( (0,0,0), (699,699,619) )
  assert config['BlockMax'] == [ 16, 16, 16 ]

def test_json5_comments(tmp_path):
  path = tmp_path / 'volume.json'
  path.write_text("""{
    // medulla test volume
    "VolumeMax": [ 300, 200, 10 ],
  }""")
  config = VolumeConfig.from_file(str(path))
  assert config.bounds() == Bbox( (0,0,0), (299,199,9) )

def test_from_extent():
  config = VolumeConfig.from_extent(FIXED_VOLUME_EXTENT)
  assert config.volume_max == (700, 700, 620)

def test_missing_file(tmp_path):
  with pytest.raises(VolumeConfigError):
    VolumeConfig.from_file(str(tmp_path / 'nope.json'))

def test_invalid_configs():
  bad = (
    "not json at all {",
    "[ 1, 2, 3 ]",
    "{}",
    '{ "VolumeMax": [ 700, 700 ] }',
    '{ "VolumeMax": [ 700, 0, 620 ] }',
    '{ "VolumeMax": [ 700, "a", 620 ] }',
  )
  for text in bad:
    try:
      VolumeConfig().from_json(text)
      assert False, text
    except VolumeConfigError:
      pass
