import python_jsonschema_objects as pjs
import json5

from .exceptions import VolumeConfigError
from .lib import Bbox

__all__ = [ 'VolumeConfig', 'FIXED_VOLUME_EXTENT' ]

# Extent of the medulla test volume imported by voxelproof-fixed
FIXED_VOLUME_EXTENT = (700, 700, 620)

positive_triple = {
  "type": "array",
  "items": {
    "type": "integer",
    "minimum": 1,
  },
  "minItems": 3,
  "maxItems": 3,
}

volume_config_schema = {
  "$schema": "http://json-schema.org/draft-04/schema#",
  "title": "Volume Configuration",
  "description": "The volume configuration handed to dvid init.",
  "required": [ "VolumeMax" ],
  "properties": {
    'VolumeMax': positive_triple, # voxel extent, exclusive
    'VoxelRes': {
      "type": "array",
      "items": {
        "type": "number"
      },
      "minItems": 3,
      "maxItems": 3,
    },
    'VoxelResUnits': { 'type': 'string' }, # e.g. nanometers
    'BlockMax': positive_triple,
  }
}

builder = pjs.ObjectBuilder(volume_config_schema)
classes = builder.build_classes()
VolumeConfigValidation = classes.VolumeConfiguration

class VolumeConfig(dict):
  """
  The dvid volume configuration JSON.

  The same file configures the datastore (dvid init config=...)
  and tells us how far the tile grid extends.

  e.g.
    {
      "VolumeMax": [ 700, 700, 620 ],
      "VoxelRes": [ 10.0, 10.0, 10.0 ],
      "VoxelResUnits": "nanometers",
      "BlockMax": [ 16, 16, 16 ]
    }
  """
  def validate(self):
    try:
      VolumeConfigValidation(**self).validate()
    except (pjs.ValidationError, TypeError, ValueError) as err:
      raise VolumeConfigError("Invalid volume configuration: {}".format(err))

    # older releases of the schema library skip array item constraints
    extent = self['VolumeMax']
    if (
      not isinstance(extent, list)
      or len(extent) != 3
      or not all(isinstance(x, int) and not isinstance(x, bool) for x in extent)
      or min(extent) <= 0
    ):
      raise VolumeConfigError(
        "VolumeMax must be 3 positive integers. Got: {}".format(extent)
      )
    return self

  def from_json(self, data):
    try:
      data = json5.loads(data)
    except ValueError as err:
      raise VolumeConfigError("Unable to parse volume configuration: {}".format(err))

    if not isinstance(data, dict):
      raise VolumeConfigError("Volume configuration must be a JSON object.")

    self.update(data)
    return self.validate()

  @classmethod
  def from_file(cls, path):
    try:
      with open(path, 'rt') as f:
        data = f.read()
    except OSError as err:
      raise VolumeConfigError("Unable to read volume configuration {}: {}".format(path, err))

    return VolumeConfig().from_json(data)

  @classmethod
  def from_extent(cls, extent):
    return VolumeConfig(VolumeMax=[ int(x) for x in extent ]).validate()

  @property
  def volume_max(self):
    return tuple(self['VolumeMax'])

  def bounds(self):
    """Bbox from the origin to the last voxel of the volume."""
    return Bbox.from_extent(self.volume_max)
