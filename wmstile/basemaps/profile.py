# -*- coding:utf-8 -*-

#  ***** GPL LICENSE BLOCK *****
#
#  This program is free software: you can redistribute it and/or modify
#  it under the terms of the GNU General Public License as published by
#  the Free Software Foundation, either version 3 of the License, or
#  (at your option) any later version.
#
#  This program is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#
#  You should have received a copy of the GNU General Public License
#  along with this program.  If not, see <http://www.gnu.org/licenses/>.
#  All rights reserved.
#  ***** GPL LICENSE BLOCK *****

import logging
log = logging.getLogger(__name__)

import math
import threading

from .gridsDefs import GRIDS
from ..proj import SRS
from ..utils import BBOX


class Profile():
	"""
	Addressable extent + reference system of a tile source

	At level zero the extent is divided into tilesWide x tilesHigh tiles,
	every next level doubles the number of columns and rows.
	Tiles are numbered from the upper left corner (NW origin).

	Profile type is derived from the reference system:
		'geodetic' >> geographic coordinates (decimal degrees)
		'mercator' >> spherical mercator
		'local' >> any other projected system
	"""

	GEODETIC = 'geodetic'
	MERCATOR = 'mercator'
	LOCAL = 'local'

	def __init__(self, srs, bbox, tilesWide=1, tilesHigh=1, name=None):
		if not isinstance(srs, SRS):
			srs = SRS(srs)
		if not isinstance(bbox, BBOX):
			bbox = BBOX(bbox)
		if not bbox.isValid:
			raise ValueError('Invalid profile extent : {}'.format(bbox))
		if tilesWide < 1 or tilesHigh < 1:
			raise ValueError('A profile needs at least one tile at level zero')
		self.srs = srs
		self.bbox = bbox
		self.tilesWide = int(tilesWide)
		self.tilesHigh = int(tilesHigh)
		self.name = name

		if self.srs.isWM:
			self.profileType = self.MERCATOR
		elif self.srs.isGeo:
			self.profileType = self.GEODETIC
		else:
			self.profileType = self.LOCAL

	@classmethod
	def create(cls, srs, xmin, ymin, xmax, ymax, tilesWide=None, tilesHigh=None):
		'''
		Build a profile from an extent
		If the number of level zero tiles is not submited it's deduced from
		the extent aspect ratio to get tiles as square as possible
		'''
		if tilesWide is None or tilesHigh is None:
			dx = xmax - xmin
			dy = ymax - ymin
			if dx <= 0 or dy <= 0:
				raise ValueError('Invalid profile extent : {} {} {} {}'.format(xmin, ymin, xmax, ymax))
			if dx >= dy:
				tilesWide, tilesHigh = max(1, int(round(dx / dy))), 1
			else:
				tilesWide, tilesHigh = 1, max(1, int(round(dy / dx)))
		return cls(srs, BBOX(xmin, ymin, xmax, ymax), tilesWide, tilesHigh)

	@classmethod
	def fromGridDef(cls, gridDef):
		return cls(gridDef['CRS'], BBOX(gridDef['bbox']), gridDef.get('tilesWide', 1), gridDef.get('tilesHigh', 1), name=gridDef.get('name'))

	@property
	def isLocal(self):
		return self.profileType == self.LOCAL

	def getNumTiles(self, level):
		'''Number of columns and rows at given level'''
		f = 2**level
		return self.tilesWide * f, self.tilesHigh * f

	def getTileDims(self, level):
		'''Width and height of a tile at given level in map units'''
		nx, ny = self.getNumTiles(level)
		return self.bbox.width / nx, self.bbox.height / ny

	def getTileBbox(self, col, row, level):
		dx, dy = self.getTileDims(level)
		xmin = self.bbox.xmin + col * dx
		ymax = self.bbox.ymax - row * dy
		return BBOX(xmin, ymax - dy, xmin + dx, ymax)

	def getTileNumber(self, x, y, level):
		"""Convert map coords to tiles number"""
		dx, dy = self.getTileDims(level)
		col = int(math.floor((x - self.bbox.xmin) / dx))
		row = int(math.floor((self.bbox.ymax - y) / dy))
		return col, row

	def getTileKey(self, x, y, level):
		col, row = self.getTileNumber(x, y, level)
		return TileKey(level, col, row, self)

	def isTileInBounds(self, col, row, level):
		nx, ny = self.getNumTiles(level)
		return 0 <= col < nx and 0 <= row < ny

	def isEquivalentTo(self, profile):
		'''Same reference system, same extent and same level zero layout'''
		if profile is None:
			return False
		if profile is self:
			return True
		return self.bbox == profile.bbox and \
			self.tilesWide == profile.tilesWide and self.tilesHigh == profile.tilesHigh and \
			self.srs.isEquivalentTo(profile.srs)

	def __repr__(self):
		return 'Profile({}, {}, {}x{})'.format(self.srs, self.bbox, self.tilesWide, self.tilesHigh)


class TileKey():
	'''Address of a tile (level, column, row) inside a profile'''

	def __init__(self, level, col, row, profile):
		if not profile.isTileInBounds(col, row, level):
			raise ValueError('Tile x{} y{} z{} is out of profile bounds'.format(col, row, level))
		self.level = level
		self.col = col
		self.row = row
		self.profile = profile

	@property
	def bbox(self):
		'''Extent of the tile in profile reference system'''
		return self.profile.getTileBbox(self.col, self.row, self.level)

	def __str__(self):
		return '{}/{}/{}'.format(self.level, self.col, self.row)

	def __repr__(self):
		return 'TileKey({}, {}, {})'.format(self.level, self.col, self.row)


class Registry():
	'''
	Hold the well known profiles shared by every source
	Each profile is built once per registry and always returned as the same object
	'''

	def __init__(self, grids=None):
		self.grids = GRIDS if grids is None else grids
		self.profiles = {}
		self.lock = threading.RLock()

	def getProfile(self, gridKey):
		with self.lock:
			profile = self.profiles.get(gridKey)
			if profile is None:
				profile = Profile.fromGridDef(self.grids[gridKey])
				self.profiles[gridKey] = profile
			return profile

	def getGlobalGeodeticProfile(self):
		return self.getProfile('GLOBAL_GEODETIC')

	def getGlobalMercatorProfile(self):
		return self.getProfile('GLOBAL_MERCATOR')
