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

import numpy as np


class HeightField():
	'''
	Grid of elevation samples
	Row 0 is the southern edge of the tile, column 0 the western edge
	'''

	def __init__(self, data):
		data = np.asarray(data, dtype='float32')
		if data.ndim != 2:
			raise ValueError('A heightfield must be a 2D array')
		self.data = data

	@classmethod
	def flat(cls, columns, rows, height=0.0):
		data = np.empty((rows, columns), dtype='float32')
		data.fill(height)
		return cls(data)

	@property
	def numColumns(self):
		return self.data.shape[1]

	@property
	def numRows(self):
		return self.data.shape[0]

	def getHeight(self, col, row):
		return float(self.data[row, col])

	def getMin(self):
		return float(self.data.min())

	def getMax(self):
		return float(self.data.max())

	def __repr__(self):
		return 'HeightField({}x{})'.format(self.numColumns, self.numRows)


class ImageToHeightFieldConverter():
	'''Turn a raster whose first band store elevation values into a heightfield'''

	def __init__(self, defaultSize=256):
		self.defaultSize = defaultSize

	def convert(self, img, scaleFactor=1.0):
		'''
		img : NpImage or None
		scaleFactor : multiplier applied to every sample (ie feet to meters)
		A missing image gives a flat heightfield of the default size
		'''
		if img is None:
			log.debug('No image to convert, build a flat heightfield')
			return HeightField.flat(self.defaultSize, self.defaultSize)

		band = img.getBand(0)
		if np.ma.is_masked(band):
			#nodata samples are set to sea level
			band = np.ma.filled(band.astype('float32'), 0)
		#image rows start at the top of the tile
		data = np.flipud(np.asarray(band, dtype='float32'))
		if scaleFactor != 1:
			data = data * np.float32(scaleFactor)
		return HeightField(data)
