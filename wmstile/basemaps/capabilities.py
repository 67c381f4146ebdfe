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

import xml.etree.ElementTree as ET
from http.client import HTTPException

from .download import downloadData
from ..errors import CapabilitiesError
from ..proj import SRS
from ..utils import BBOX

from PIL import Image


def localName(elem):
	'''Tag name without xml namespace'''
	return elem.tag.rsplit('}', 1)[-1]

def findChild(elem, name):
	for child in elem:
		if localName(child) == name:
			return child
	return None

def findChildren(elem, name):
	return [child for child in elem if localName(child) == name]

def childText(elem, name, default=''):
	child = findChild(elem, name)
	if child is None or child.text is None:
		return default
	return child.text.strip()


def srsKey(srs):
	'''Normalized srs string, legacy aliases resolve to the same key'''
	try:
		return str(SRS(srs))
	except ValueError:
		return str(srs).upper()


class Layer():
	'''A named (or grouping) layer of a WMS capabilities document'''

	def __init__(self, name='', title='', abstract='', parent=None):
		self.name = name
		self.title = title
		self.abstract = abstract
		self.parent = parent
		self.srsList = []
		self.latLonBBox = None
		self.boundingBoxes = {} #srs string >> BBOX in this srs
		self.layers = []

	def getExtents(self):
		'''
		Geographic extent (minx, miny, maxx, maxy) of the layer,
		inherited from parent layers when not declared
		'''
		layer = self
		while layer is not None:
			if layer.latLonBBox is not None:
				return tuple(layer.latLonBBox)
			layer = layer.parent
		return None

	def getBoundingBox(self, srs):
		'''Native extent declared for srs, inherited from parent layers too'''
		key = srsKey(srs)
		layer = self
		while layer is not None:
			bbox = layer.boundingBoxes.get(key)
			if bbox is not None:
				return bbox
			layer = layer.parent
		return None

	def __repr__(self):
		return 'Layer({!r})'.format(self.name)


class Capabilities():
	'''Parsed content of a WMS GetCapabilities document'''

	def __init__(self, version='', title='', formats=None, layers=None):
		self.version = version
		self.title = title
		self.formats = formats or []
		self.layers = layers or []

	def getLayerByName(self, name):
		'''Depth first search of a layer, names are compared case insensitive'''
		name = name.lower()
		stack = list(reversed(self.layers))
		while stack:
			layer = stack.pop()
			if layer.name.lower() == name:
				return layer
			stack.extend(reversed(layer.layers))
		return None

	def suggestExtension(self):
		'''
		File extension of the first GetMap format we are able to decode
		Return an empty string if there is none
		'''
		for fmt in self.formats:
			ext = mimeToExtension(fmt)
			if ext and isReadableExtension(ext):
				return ext
		return ''


def mimeToExtension(mime):
	'''"image/png; mode=8bit" >> "png"'''
	mime = mime.split(';')[0].strip().lower()
	if '/' not in mime:
		return ''
	ext = mime.split('/', 1)[1]
	#ie image/vnd.jpeg-png or image/x-png
	if ext.startswith('x-'):
		ext = ext[2:]
	return ext

def isReadableExtension(ext):
	return '.' + ext in Image.registered_extensions()


class CapabilitiesReader():

	@classmethod
	def read(cls, url):
		'''Fetch and parse a capabilities document, raise CapabilitiesError on any failure'''
		try:
			data = downloadData(url, accept='application/vnd.ogc.wms_xml,text/xml,*/*')
		except (OSError, HTTPException, ValueError) as e:
			raise CapabilitiesError('Unable to fetch {} : {}'.format(url, e)) from e
		return cls.readString(data)

	@classmethod
	def readString(cls, data):
		try:
			root = ET.fromstring(data)
		except ET.ParseError as e:
			raise CapabilitiesError('Invalid capabilities xml : {}'.format(e)) from e

		if localName(root) not in ['WMT_MS_Capabilities', 'WMS_Capabilities']:
			raise CapabilitiesError('Not a WMS capabilities document : ' + localName(root))

		version = root.get('version', '')
		service = findChild(root, 'Service')
		title = childText(service, 'Title') if service is not None else ''

		formats = []
		layers = []
		capability = findChild(root, 'Capability')
		if capability is not None:
			request = findChild(capability, 'Request')
			getMap = findChild(request, 'GetMap') if request is not None else None
			if getMap is not None:
				formats = [f.text.strip() for f in findChildren(getMap, 'Format') if f.text]
			for elem in findChildren(capability, 'Layer'):
				layers.append(cls._readLayer(elem, version))

		return Capabilities(version, title, formats, layers)

	@classmethod
	def _readLayer(cls, elem, version, parent=None):
		layer = Layer(childText(elem, 'Name'), childText(elem, 'Title'), childText(elem, 'Abstract'), parent)

		#1.1.1 use SRS, 1.3.0 use CRS
		for tag in ['SRS', 'CRS']:
			for srs in findChildren(elem, tag):
				if srs.text:
					#old servers put space separated lists in a single element
					layer.srsList.extend(srs.text.split())

		latlon = findChild(elem, 'LatLonBoundingBox')
		geo = findChild(elem, 'EX_GeographicBoundingBox')
		try:
			if latlon is not None:
				layer.latLonBBox = BBOX(*[float(latlon.get(k)) for k in ['minx', 'miny', 'maxx', 'maxy']])
			elif geo is not None:
				layer.latLonBBox = BBOX(*[float(childText(geo, k)) for k in
					['westBoundLongitude', 'southBoundLatitude', 'eastBoundLongitude', 'northBoundLatitude']])
		except (TypeError, ValueError):
			log.warning('Ignore invalid geographic extent for layer {}'.format(layer.name))

		for bb in findChildren(elem, 'BoundingBox'):
			srs = bb.get('SRS') or bb.get('CRS')
			try:
				minx, miny, maxx, maxy = [float(bb.get(k)) for k in ['minx', 'miny', 'maxx', 'maxy']]
			except (TypeError, ValueError):
				continue
			if srs is None:
				continue
			if version.startswith('1.3') and srs.upper() == 'EPSG:4326':
				#wms 1.3.0 honor the latitude first axis order of epsg 4326
				minx, miny, maxx, maxy = miny, minx, maxy, maxx
			layer.boundingBoxes[srsKey(srs)] = BBOX(minx, miny, maxx, maxy)

		for child in findChildren(elem, 'Layer'):
			layer.layers.append(cls._readLayer(child, version, layer))

		return layer
