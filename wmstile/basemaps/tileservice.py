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
import xml.etree.ElementTree as ET
from http.client import HTTPException
from urllib.parse import unquote

from .capabilities import localName, findChild, findChildren, childText
from .download import downloadData
from .profile import Profile
from .template import RequestTemplate
from ..errors import TileServiceError
from ..proj import SRS
from ..utils import BBOX

#tolerance used when counting tiles, avoid an extra column for rounding noise
EPSILON = 1e-9


class TilePattern():
	"""
	One pre tiled GetMap request advertised by a TileService
	ie request=GetMap&layers=global_mosaic&srs=EPSG:4326&format=image/jpeg&styles=visual&width=512&height=512&bbox=-180,38,-52,166

	The bbox of the pattern gives the size of a tile at the pattern level,
	its value is replaced by the bbox slot to get a reusable request template
	"""

	def __init__(self, pattern, group=None):
		self.pattern = pattern.strip()
		self.group = group

		params = {}
		for param in self.pattern.lstrip('?&').split('&'):
			if '=' in param:
				k, v = param.split('=', 1)
				params[k.strip().lower()] = unquote(v.strip())

		self.layers = params.get('layers', '')
		self.styles = params.get('styles', '')
		self.format = params.get('format', '')
		self.srs = params.get('srs', params.get('crs', ''))
		try:
			self.imageWidth = int(params.get('width', 0))
			self.imageHeight = int(params.get('height', 0))
			self.bbox = BBOX.fromString(params['bbox'])
		except (KeyError, ValueError) as e:
			raise TileServiceError('Invalid tile pattern : ' + self.pattern) from e
		if not self.bbox.isValid:
			raise TileServiceError('Empty tile extent in pattern : ' + self.pattern)

		self.template = RequestTemplate.fromUrl(self.pattern, 'bbox')

	@property
	def tileWidth(self):
		'''tile width in map units'''
		return self.bbox.width

	@property
	def tileHeight(self):
		return self.bbox.height

	@property
	def topLeft(self):
		return self.bbox.ul

	def matchFormat(self, formats):
		return self.format.lower() in [f.lower() for f in formats if f]

	def __repr__(self):
		return 'TilePattern({!r})'.format(self.pattern)


class TiledGroup():

	def __init__(self, name='', title='', abstract='', bbox=None):
		self.name = name
		self.title = title
		self.abstract = abstract
		self.bbox = bbox #geographic extent of the data
		self.patterns = []

	def __repr__(self):
		return 'TiledGroup({!r}, {} patterns)'.format(self.name, len(self.patterns))


class TileService():
	'''Parsed content of a JPL TileService document'''

	def __init__(self, name='', title='', dataExtent=None, groups=None):
		self.name = name
		self.title = title
		self.dataExtent = dataExtent
		self.groups = groups or []

	def getMatchingPatterns(self, layers, format, styles, srs, imageWidth, imageHeight, wmsFormat=None):
		"""
		List patterns usable for the submited request parameters
		Groups are scanned in document order and the scan stops on the first group with matching patterns
		format can be a file extension (png) or a mime type (image/png)
		"""
		formats = [format, 'image/' + format, wmsFormat]
		try:
			srs = SRS(srs)
		except ValueError:
			log.warning('Invalid srs {}, no tile pattern can match'.format(srs))
			return []
		srsCache = {}

		def sameSrs(patternSrs):
			if patternSrs not in srsCache:
				try:
					srsCache[patternSrs] = srs.isEquivalentTo(SRS(patternSrs))
				except ValueError:
					srsCache[patternSrs] = False
			return srsCache[patternSrs]

		matches = []
		for group in self.groups:
			for pattern in group.patterns:
				if pattern.layers.lower() == layers.lower() and \
				pattern.matchFormat(formats) and \
				pattern.styles.lower() == styles.lower() and \
				pattern.imageWidth == imageWidth and pattern.imageHeight == imageHeight and \
				sameSrs(pattern.srs):
					matches.append(pattern)
			if matches:
				break
		return matches

	def createProfile(self, patterns, registry=None):
		"""
		Build the profile matching a list of patterns (assumed to share the same srs)
		The lowest resolution pattern give the level zero tile size and the grid origin,
		the number of level zero tiles is the one needed to cover the data extent
		"""
		if not patterns:
			return None

		#Find the lowest resolution pattern
		top = patterns[0]
		for pattern in patterns:
			if pattern.tileWidth > top.tileWidth and pattern.tileHeight > top.tileHeight:
				top = pattern

		srs = SRS(top.srs)
		dx, dy = top.tileWidth, top.tileHeight
		xmin, ymax = top.topLeft

		#Data extents are geographic so they only make sense for a geographic grid
		extent = None
		if srs.isGeo:
			if top.group is not None and top.group.bbox is not None:
				extent = top.group.bbox
			elif self.dataExtent is not None:
				extent = self.dataExtent
		if extent is None:
			extent = top.bbox

		#move the origin up and left until it covers the data
		if extent.xmin < xmin:
			xmin -= math.ceil((xmin - extent.xmin) / dx - EPSILON) * dx
		if extent.ymax > ymax:
			ymax += math.ceil((extent.ymax - ymax) / dy - EPSILON) * dy

		tilesWide = max(1, int(math.ceil((extent.xmax - xmin) / dx - EPSILON)))
		tilesHigh = max(1, int(math.ceil((ymax - extent.ymin) / dy - EPSILON)))
		bbox = BBOX(xmin, ymax - tilesHigh * dy, xmin + tilesWide * dx, ymax)

		if registry is not None and srs.isGeo:
			globalGeodetic = registry.getGlobalGeodeticProfile()
			if bbox == globalGeodetic.bbox and tilesWide == globalGeodetic.tilesWide and tilesHigh == globalGeodetic.tilesHigh:
				return globalGeodetic

		return Profile(srs, bbox, tilesWide, tilesHigh)


class TileServiceReader():

	@classmethod
	def read(cls, url):
		'''Fetch and parse a TileService document, raise TileServiceError on any failure'''
		try:
			data = downloadData(url, accept='text/xml,*/*')
		except (OSError, HTTPException, ValueError) as e:
			raise TileServiceError('Unable to fetch {} : {}'.format(url, e)) from e
		return cls.readString(data)

	@classmethod
	def readString(cls, data):
		try:
			root = ET.fromstring(data)
		except ET.ParseError as e:
			raise TileServiceError('Invalid tileservice xml : {}'.format(e)) from e

		if localName(root) != 'WMS_Tile_Service':
			raise TileServiceError('Not a TileService document : ' + localName(root))

		service = findChild(root, 'Service')
		name = childText(service, 'Name') if service is not None else ''
		title = childText(service, 'Title') if service is not None else ''

		dataExtent = None
		groups = []
		tiledPatterns = findChild(root, 'TiledPatterns')
		if tiledPatterns is not None:
			dataExtent = readLatLonBBox(tiledPatterns)
			#tiled groups can be nested into other groups
			for elem in tiledPatterns.iter():
				if localName(elem) == 'TiledGroup':
					groups.append(cls._readGroup(elem, dataExtent))

		return TileService(name, title, dataExtent, groups)

	@classmethod
	def _readGroup(cls, elem, dataExtent):
		bbox = readLatLonBBox(elem)
		group = TiledGroup(childText(elem, 'Name'), childText(elem, 'Title'), childText(elem, 'Abstract'), bbox or dataExtent)
		for patternElem in findChildren(elem, 'TilePattern'):
			if not patternElem.text:
				continue
			#an element can hold several space separated patterns of the same level, the first one is enough
			tokens = patternElem.text.split()
			if not tokens:
				continue
			try:
				group.patterns.append(TilePattern(tokens[0], group))
			except TileServiceError:
				log.debug('Skip invalid tile pattern {}'.format(tokens[0]))
		return group


def readLatLonBBox(elem):
	bb = findChild(elem, 'LatLonBoundingBox')
	if bb is None:
		return None
	try:
		return BBOX(*[float(bb.get(k)) for k in ['minx', 'miny', 'maxx', 'maxy']])
	except (TypeError, ValueError):
		return None
