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

from .checkdeps import HAS_GDAL, HAS_PYPROJ, HAS_PIL
from .settings import settings
from .errors import WMSError, CapabilitiesError, TileServiceError, ProfileError, TileFetchError

from .utils import BBOX

from .proj import SRS

from .georaster import NpImage, HeightField, ImageToHeightFieldConverter

from .basemaps import GRIDS, Profile, TileKey, Registry, RequestTemplate, WMSSource, WMSOptions, ProfileResolver

from .drivers import openSource


logsFormat = "%(levelname)s:%(name)s:%(lineno)d:%(message)s"

def configureLogging(level='INFO'):
	'''stdout logging for scripts, libraries embedding the package keep their own config'''
	logging.basicConfig(level=logging.getLevelName(level), format=logsFormat)
