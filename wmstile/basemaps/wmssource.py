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

#built-in imports
import logging
log = logging.getLogger(__name__)

import threading
import queue

#core imports
from .resolver import ProfileResolver
from .download import readImage
from ..georaster import ImageToHeightFieldConverter
from ..errors import ProfileError, TileFetchError, CapabilitiesError

DEFAULT_TILE_SIZE = 256
FEET_TO_METERS = 0.3048


def asInt(value, default):
	try:
		return int(str(value).strip())
	except (TypeError, ValueError):
		return default


class WMSOptions():
	"""
	Options of a WMS source, read once from a key/value mapping

		url >> service base url, required
		capabilities_url >> default to url + GetCapabilities request
		tileservice_url >> default to url + GetTileService request
		layers >> layer name, a comma separated list is passed as is to the server
		style
		format >> file extension of the images (png, jpeg ...)
		wms_format >> mime type used in the FORMAT parameter, default to image/ + format
		srs >> default to EPSG:4326
		tile_size >> tile size in pixels, falls back to default_tile_size then 256
		elevation_unit >> 'm' or 'ft'
	"""

	def __init__(self, options):
		url = options.get('url')
		if not url:
			raise ValueError('A WMS source needs an url')
		self.url = url
		self.capabilitiesURL = options.get('capabilities_url', '')
		self.tileServiceURL = options.get('tileservice_url', '')
		self.layers = options.get('layers', '')
		self.style = options.get('style', '')
		self.format = options.get('format', '')
		self.wmsFormat = options.get('wms_format', '')
		self.srs = options.get('srs', '')

		if options.get('tile_size') is not None:
			tileSize = asInt(options['tile_size'], DEFAULT_TILE_SIZE)
		elif options.get('default_tile_size') is not None:
			tileSize = asInt(options['default_tile_size'], DEFAULT_TILE_SIZE)
		else:
			tileSize = DEFAULT_TILE_SIZE
		if tileSize <= 0:
			log.warning('Invalid tile size {}, use {}'.format(tileSize, DEFAULT_TILE_SIZE))
			tileSize = DEFAULT_TILE_SIZE
		self.tileSize = tileSize

		unit = str(options.get('elevation_unit') or 'm').strip().lower()
		if unit not in ['m', 'ft']:
			log.warning('Unknown elevation unit {}, assume meters'.format(unit))
			unit = 'm'
		self.elevationUnit = unit


class WMSSource():
	"""
	Tile source backed by a WMS (or JPL TileService) endpoint

	Usage :
		src = WMSSource({'url': ..., 'layers': ...})
		src.initialize(mapProfile)
		img = src.createImage(key)

	Once initialized the profile and the request template never change,
	so tiles can be requested from several threads at the same time.
	"""

	def __init__(self, options, registry=None, capabilitiesReader=None, tileServiceReader=None, imageReader=None):
		if not isinstance(options, WMSOptions):
			options = WMSOptions(options)
		self.options = options
		self.resolver = ProfileResolver(options, registry, capabilitiesReader, tileServiceReader)
		self.imageReader = readImage if imageReader is None else imageReader

		self.profile = None
		self.template = None
		self.format = options.format
		self.srs = options.srs

	@property
	def isInitialized(self):
		return self.template is not None

	def createProfile(self, mapProfile=None):
		'''
		Resolve the source profile and build the request template
		Return None if the source is not usable
		'''
		try:
			resolution = self.resolver.resolve(mapProfile)
		except CapabilitiesError as e:
			log.warning('Unable to read WMS GetCapabilities; failing. {}'.format(e))
			return None

		if resolution.profile is None:
			log.warning('Unable to establish a profile for layer {}'.format(self.options.layers))
			return None

		self.template = resolution.template
		self.format = resolution.format
		self.srs = resolution.srs
		self.profile = resolution.profile
		return self.profile

	def initialize(self, mapProfile=None):
		profile = self.createProfile(mapProfile)
		if profile is None:
			raise ProfileError('WMS source {} cannot be used, no profile available'.format(self.options.url))
		return profile

	def createURI(self, key):
		if not self.isInitialized:
			raise ProfileError('WMS source is not initialized')
		return self.template.render(key.bbox)

	def createImage(self, key):
		'''Raise TileFetchError if the image cannot be fetched'''
		return self.imageReader(self.createURI(key))

	def createHeightField(self, key):
		'''
		Elevation tile in meters
		A failing request is not an error, it gives a flat heightfield
		'''
		try:
			img = self.createImage(key)
		except TileFetchError as e:
			log.warning('Failed to read heightfield from {} ({})'.format(e.url, e))
			img = None

		#Scale the heightfield to meters
		if self.options.elevationUnit == 'ft':
			scaleFactor = FEET_TO_METERS
		else:
			scaleFactor = 1.0

		conv = ImageToHeightFieldConverter(self.options.tileSize)
		return conv.convert(img, scaleFactor)

	def createImages(self, keys, nbThread=4):
		"""
		Fetch several tiles through threads
		Return images in the order of keys, None for tiles that failed
		"""
		if not self.isInitialized:
			raise ProfileError('WMS source is not initialized')

		results = [None] * len(keys)
		jobs = queue.Queue()
		for i, key in enumerate(keys):
			jobs.put((i, key))

		def downloading():
			while True:
				try:
					i, key = jobs.get_nowait()
				except queue.Empty:
					break
				try:
					results[i] = self.createImage(key)
				except TileFetchError as e:
					log.error("Can't get tile {} : {}".format(key, e))
				except Exception:
					#the worker must keep emptying the queue, the tile stays None
					log.exception("Unexpected error while getting tile {}".format(key))
				finally:
					jobs.task_done()

		threads = []
		for i in range(min(nbThread, len(keys))):
			t = threading.Thread(target=downloading, daemon=True)
			threads.append(t)
			t.start()
		for t in threads:
			t.join()

		return results

	def getPixelsPerTile(self):
		return self.options.tileSize

	def getExtension(self):
		return self.format
