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

from collections import namedtuple

from .template import RequestTemplate, getSeparator, quoteParam
from .capabilities import CapabilitiesReader
from .tileservice import TileServiceReader
from .profile import Profile, Registry
from ..errors import TileServiceError
from ..proj import SRS

DEFAULT_FORMAT = 'png'
DEFAULT_SRS = 'EPSG:4326'

#Outcome of a resolution, profile is None if no strategy succeed
Resolution = namedtuple('Resolution', ['profile', 'template', 'format', 'srs'])


def capabilitiesUrl(prefix):
	return prefix + getSeparator(prefix) + 'SERVICE=WMS&VERSION=1.1.1&REQUEST=GetCapabilities'

def tileServiceUrl(prefix):
	return prefix + getSeparator(prefix) + 'request=GetTileService'


class ResolveContext():
	'''State shared by the profile strategies of one resolution'''

	def __init__(self, options, mapProfile, capabilities, srs, registry):
		self.options = options
		self.mapProfile = mapProfile
		self.capabilities = capabilities
		self.srs = srs #None if the requested srs cannot be parsed
		self.registry = registry

	@property
	def isGeo(self):
		if self.srs is None:
			return False
		try:
			return bool(self.srs.isGeo)
		except ValueError:
			return False


######################################
# Profile strategies, ordered by priority
# each one return a Profile or None

def sameSrsAsMap(ctx):
	'''The map already use the service srs, reuse its profile to avoid resampling'''
	if ctx.srs is None or ctx.mapProfile is None:
		return None
	try:
		if ctx.mapProfile.srs.isEquivalentTo(ctx.srs):
			return ctx.mapProfile
	except ValueError:
		pass
	return None

def layerExtents(ctx):
	'''Build the profile from the extent the capabilities advertise for the layer'''
	if ctx.srs is None:
		return None
	layer = ctx.capabilities.getLayerByName(ctx.options.layers)
	if layer is None:
		return None

	bbox = None
	if not ctx.isGeo:
		bbox = layer.getBoundingBox(ctx.srs)
	if bbox is not None:
		minx, miny, maxx, maxy = bbox
	else:
		extents = layer.getExtents()
		if extents is None:
			return None
		minx, miny, maxx, maxy = extents

	if ctx.isGeo:
		globalGeodetic = ctx.registry.getGlobalGeodeticProfile()
		gminx, gminy, gmaxx, gmaxy = globalGeodetic.bbox
		if minx == gminx and miny == gminy and maxx == gmaxx and maxy == gmaxy:
			return globalGeodetic

	try:
		return Profile.create(ctx.srs, minx, miny, maxx, maxy)
	except ValueError as e:
		log.warning('Cannot build a profile from layer {} extent : {}'.format(layer.name, e))
		return None

def globalMapFallback(ctx):
	'''Last resort, only valid for global services'''
	if ctx.isGeo and ctx.mapProfile is not None and not ctx.mapProfile.isLocal:
		return ctx.mapProfile
	return None

STRATEGIES = [sameSrsAsMap, layerExtents, globalMapFallback]


class ProfileResolver():
	"""
	Negotiate the profile of a WMS source and synthesize its GetMap request template

	Collaborators (readers and registry) can be injected, the defaults fetch
	documents over http and use a registry owned by the resolver
	"""

	def __init__(self, options, registry=None, capabilitiesReader=None, tileServiceReader=None, strategies=None):
		self.options = options
		self.registry = Registry() if registry is None else registry
		self.capabilitiesReader = CapabilitiesReader if capabilitiesReader is None else capabilitiesReader
		self.tileServiceReader = TileServiceReader if tileServiceReader is None else tileServiceReader
		self.strategies = STRATEGIES if strategies is None else strategies

	def buildTemplate(self, format, srs):
		'''Canonical WMS 1.1.1 GetMap request'''
		opts = self.options
		prefix = opts.url
		wmsFormat = opts.wmsFormat if opts.wmsFormat else 'image/' + format
		head = ''.join([
			prefix, getSeparator(prefix),
			'SERVICE=WMS&VERSION=1.1.1&REQUEST=GetMap',
			'&LAYERS=', quoteParam(opts.layers),
			'&FORMAT=', quoteParam(wmsFormat),
			'&STYLES=', quoteParam(opts.style),
			'&SRS=', quoteParam(srs),
			'&WIDTH=', str(opts.tileSize),
			'&HEIGHT=', str(opts.tileSize),
			'&BBOX='])
		return RequestTemplate(head)

	def selectProfile(self, ctx):
		for strategy in self.strategies:
			profile = strategy(ctx)
			if profile is not None:
				log.debug('Profile found by strategy {}'.format(strategy.__name__))
				return profile
		return None

	def probeTileService(self, format, srs):
		'''
		Look for a JPL TileService, return (profile, template) or None
		A missing or unreadable TileService is the common case and never an error
		'''
		opts = self.options
		url = opts.tileServiceURL or tileServiceUrl(opts.url)
		log.info('Testing for JPL/TileService at {}'.format(url))
		try:
			tileService = self.tileServiceReader.read(url)
		except TileServiceError as e:
			log.info('No JPL/TileService document found; assuming standard WMS ({})'.format(e))
			return None

		log.info('Found JPL/TileService document')
		patterns = tileService.getMatchingPatterns(opts.layers, format, opts.style, srs, opts.tileSize, opts.tileSize, opts.wmsFormat)
		if not patterns:
			log.info('No TileService pattern match layer {}'.format(opts.layers))
			return None

		profile = tileService.createProfile(patterns, self.registry)
		template = patterns[0].template.withPrefix(opts.url + getSeparator(opts.url))
		return profile, template

	def resolve(self, mapProfile=None):
		"""
		Run the whole negotiation, raise CapabilitiesError if capabilities are unreachable
		Return a Resolution, its profile is None if the source cannot be used
		"""
		opts = self.options

		url = opts.capabilitiesURL or capabilitiesUrl(opts.url)
		capabilities = self.capabilitiesReader.read(url)
		log.info('Got capabilities from {}'.format(url))

		format = opts.format
		if not format:
			format = capabilities.suggestExtension()
			log.info('No format specified, capabilities suggested extension {}'.format(format))
		if not format:
			format = DEFAULT_FORMAT
		srsCode = opts.srs or DEFAULT_SRS

		template = self.buildTemplate(format, srsCode)

		try:
			srs = SRS(srsCode)
		except ValueError:
			log.warning('Unable to parse srs {}'.format(srsCode))
			srs = None

		ctx = ResolveContext(opts, mapProfile, capabilities, srs, self.registry)
		profile = self.selectProfile(ctx)

		tiled = self.probeTileService(format, srsCode)
		if tiled is not None:
			profile, template = tiled

		template = template.withSuffix('&.' + format)

		return Resolution(profile, template, format, srsCode)
