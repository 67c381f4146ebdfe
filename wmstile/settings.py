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

import os
import json

from .checkdeps import HAS_GDAL, HAS_PYPROJ, HAS_PIL

def getAvailableProjEngines():
	engines = ['AUTO']
	if HAS_GDAL:
		engines.append('GDAL')
	if HAS_PYPROJ:
		engines.append('PYPROJ')
	return engines

def getAvailableImgEngines():
	engines = ['AUTO']
	if HAS_GDAL:
		engines.append('GDAL')
	if HAS_PIL:
		engines.append('PIL')
	return engines


class Settings():

	def __init__(self, **kwargs):
		self._proj_engine = kwargs.get('proj_engine', 'AUTO')
		self._img_engine = kwargs.get('img_engine', 'AUTO')
		self.user_agent = kwargs['user_agent']
		self._http_timeout = kwargs.get('http_timeout')

	@property
	def proj_engine(self):
		return self._proj_engine

	@proj_engine.setter
	def proj_engine(self, engine):
		if engine not in getAvailableProjEngines():
			raise IOError
		else:
			self._proj_engine = engine

	@property
	def img_engine(self):
		return self._img_engine

	@img_engine.setter
	def img_engine(self, engine):
		if engine not in getAvailableImgEngines():
			raise IOError
		else:
			self._img_engine = engine

	@property
	def http_timeout(self):
		'''Seconds before an http request is dropped, None blocks until the server answers'''
		return self._http_timeout

	@http_timeout.setter
	def http_timeout(self, value):
		if value is not None and value <= 0:
			raise ValueError('Timeout must be a positive number of seconds')
		self._http_timeout = value


cfgFile = os.path.join(os.path.dirname(__file__), "settings.json")

with open(cfgFile, 'r') as cfg:
	prefs = json.load(cfg)

settings = Settings(**prefs)
