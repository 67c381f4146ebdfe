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

import os

from .basemaps import WMSSource

#Registered source drivers, keyed by the extension of the source name
DRIVERS = {
	'wms' : WMSSource,
	'osgearth_wms' : WMSSource
}


def getExtension(name):
	return os.path.splitext(name)[1].lstrip('.').lower()

def acceptsExtension(ext):
	return ext.lower() in DRIVERS

def openSource(name, options, mapProfile=None, **kwargs):
	"""
	Build and initialize the source driver handling name extension (ie 'imagery.wms')
	Extra keyword arguments are passed to the driver constructor
	The source is returned only if it's usable, otherwise the error is raised
	"""
	ext = getExtension(name) or name.lower()
	if not acceptsExtension(ext):
		raise ValueError('No driver for {}'.format(name))
	src = DRIVERS[ext](options, **kwargs)
	src.initialize(mapProfile)
	log.debug('Source {} ready, profile {}'.format(name, src.profile))
	return src
