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

from ..checkdeps import HAS_GDAL, HAS_PYPROJ
from ..settings import settings

if HAS_GDAL:
	from osgeo import osr

if HAS_PYPROJ:
	import pyproj


#Legacy codes still advertised by many WMS servers for the spherical mercator
WM_ALIASES = [900913, 3785, 102113, 102100]

#WKT roots accepted as raw crs definition
WKT_KEYWORDS = ('GEOGCS', 'PROJCS', 'GEOCCS', 'COMPD_CS', 'GEOGCRS', 'PROJCRS', 'BOUNDCRS', 'COMPOUNDCRS')


class SRS():

	'''
	A simple class to handle Spatial Ref System inputs
	It's also the oracle used to decide if two references describe the same coordinate system
	'''

	@classmethod
	def validate(cls, crs):
		try:
			cls(crs)
			return True
		except ValueError:
			return False

	def __init__(self, crs):
		'''
		Valid crs input can be :
		> an epsg code (integer or string)
		> a SRID string (AUTH:CODE), including the WMS specific CRS:84
		> a proj4 string
		> a WKT string
		'''
		if isinstance(crs, SRS):
			crs = str(crs)

		#force cast to string
		crs = str(crs).strip()

		self.wkt = None
		self._crs = None

		#case 1 : crs is just a code
		if crs.isdigit():
			self.auth = 'EPSG' #assume authority is EPSG
			self.code = int(crs)
			self.proj4 = '+init=epsg:'+str(self.code)

		#case 2 : crs is a WKT definition
		elif crs.upper().startswith(WKT_KEYWORDS):
			self.auth = None
			self.code = None
			self.proj4 = None
			self.wkt = crs

		#case 3 crs is in the form AUTH:CODE
		elif ':' in crs and not crs.startswith('+'):
			self.auth, self.code = crs.rsplit(':', 1)
			if self.auth.startswith('+init='):
				_, self.auth = self.auth.split('=')
			self.auth = self.auth.upper()
			if self.code.isdigit():
				self.code = int(self.code)
				self.proj4 = '+init=' + self.auth.lower() + ':' + str(self.code)
			else:
				raise ValueError('Invalid CRS : '+crs)

		#case 4 : crs is proj4 string
		elif crs and all([param.startswith('+') for param in crs.split(' ') if param]):
			self.auth = None
			self.code = None
			self.proj4 = crs

		else:
			raise ValueError('Invalid CRS : '+crs)

		if self.auth == 'EPSG' and self.code in WM_ALIASES:
			log.debug('Map legacy code {} to EPSG:3857'.format(self.code))
			self.code = 3857
			self.proj4 = '+init=epsg:3857'

	@property
	def SRID(self):
		if self.isSRID:
			return self.auth + ':' + str(self.code)
		else:
			return None

	@property
	def isSRID(self):
		return self.auth is not None and self.code is not None

	@property
	def isEPSG(self):
		return self.auth == 'EPSG' and self.code is not None

	@property
	def isWM(self):
		return self.auth == 'EPSG' and self.code == 3857

	@property
	def isWGS84(self):
		return (self.auth == 'EPSG' and self.code == 4326) or (self.auth == 'CRS' and self.code == 84)

	def __str__(self):
		'''Return the best string representation for this crs'''
		if self.isSRID:
			return self.SRID
		elif self.proj4 is not None:
			return self.proj4
		else:
			return self.wkt

	def __repr__(self):
		return 'SRS({!r})'.format(str(self))

	def __eq__(self, srs2):
		return self.__str__() == srs2.__str__()

	def __hash__(self):
		return hash(str(self))

	@property
	def _definition(self):
		'''Input understood by both pyproj and osr'''
		if self.auth == 'CRS' and self.code == 84:
			return 'OGC:CRS84'
		elif self.isSRID:
			return self.SRID
		elif self.proj4 is not None:
			return self.proj4
		else:
			return self.wkt

	@property
	def engine(self):
		engine = settings.proj_engine
		if engine == 'AUTO':
			if HAS_PYPROJ:
				return 'PYPROJ'
			elif HAS_GDAL:
				return 'GDAL'
			else:
				raise ImportError("No projection engine available")
		return engine

	def getPyProj(self):
		'''Build (and keep) the pyproj CRS object'''
		if not HAS_PYPROJ:
			raise ImportError('PYPROJ not available')
		if self._crs is None:
			try:
				self._crs = pyproj.CRS.from_user_input(self._definition)
			except pyproj.exceptions.CRSError as e:
				raise ValueError('Cannot initialize pyproj : ' + str(self)) from e
		return self._crs

	def getOgrSpatialRef(self):
		'''Build gdal osr spatial ref object'''
		if not HAS_GDAL:
			raise ImportError('GDAL not available')

		prj = osr.SpatialReference()
		prj.SetAxisMappingStrategy(osr.OAMS_TRADITIONAL_GIS_ORDER)

		if self.isEPSG:
			r = prj.ImportFromEPSG(self.code)
		elif self.wkt is not None:
			r = prj.ImportFromWkt(self.wkt)
		elif self.isSRID:
			r = prj.SetFromUserInput(self._definition)
		else:
			r = prj.ImportFromProj4(self.proj4)

		#import functions do not raise any exception
		#but return a non zero code if the projection is invalid
		if r > 0:
			raise ValueError('Cannot initialize osr : ' + str(self))

		return prj

	@property
	def isGeo(self):
		if self.isWGS84:
			return True
		if self.engine == 'GDAL':
			return self.getOgrSpatialRef().IsGeographic() == 1
		else:
			return self.getPyProj().is_geographic

	def isEquivalentTo(self, srs2):
		'''
		Test if two references describe the same coordinate system,
		even if they are not written the same way (ie EPSG:4326 vs CRS:84 vs proj4)
		Axis order is ignored because WMS 1.1.1 always use easting, northing
		'''
		if srs2 is None:
			return False
		if not isinstance(srs2, SRS):
			srs2 = SRS(srs2)
		if self == srs2:
			return True
		if self.isWGS84 and srs2.isWGS84:
			return True
		if self.engine == 'GDAL':
			return self.getOgrSpatialRef().IsSame(srs2.getOgrSpatialRef()) == 1
		else:
			return self.getPyProj().equals(srs2.getPyProj(), ignore_axis_order=True)

