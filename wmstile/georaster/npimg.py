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

import io
import uuid

import numpy as np

from ..checkdeps import HAS_GDAL, HAS_PIL
from ..settings import settings

if HAS_PIL:
	from PIL import Image

if HAS_GDAL:
	from osgeo import gdal


class NpImage():
	'''Represent an image as Numpy array'''

	def _getIFACE(self):

		engine = settings.img_engine

		if engine == 'AUTO':
			if HAS_PIL:
				return 'PIL'
			elif HAS_GDAL:
				return 'GDAL'
			else:
				raise ImportError("No image engine available")
		elif engine == 'GDAL' and HAS_GDAL:
			return 'GDAL'
		elif engine == 'PIL' and HAS_PIL:
			return 'PIL'
		else:
			raise ImportError(str(engine) + " interface unavailable")

	def __init__(self, data, noData=None):
		'''
		init from bytes data, Numpy array, NpImage, PIL Image or GDAL dataset
		noData : the value used to represent nodata, will be used to define a numpy mask
		'''
		self.IFACE = self._getIFACE()

		self.data = None
		self.noData = noData

		#init from another NpImage instance
		if isinstance(data, NpImage):
			self.data = data.data

		#init from numpy array
		elif isinstance(data, np.ndarray):
			self.data = data

		#init from bytes data (BLOB)
		elif isinstance(data, bytes):
			self.data = self._npFromBLOB(data)

		#init from GDAL dataset instance
		elif HAS_GDAL and isinstance(data, gdal.Dataset):
			self.data = self._npFromGDAL(data)

		#init from PIL Image instance
		elif HAS_PIL and isinstance(data, Image.Image):
			self.data = self._npFromPIL(data)

		if self.data is None:
			raise ValueError('Unable to load image data')

		#Mask nodata value to avoid bias when computing min or max statistics
		if self.noData is not None:
			self.data = np.ma.masked_array(self.data, self.data == self.noData)

	@property
	def size(self):
		'''(width, height) in pixels'''
		return self.data.shape[1], self.data.shape[0]

	@property
	def nbBands(self):
		if len(self.data.shape) == 2:
			return 1
		elif len(self.data.shape) == 3:
			return self.data.shape[2]

	@property
	def isOneBand(self):
		return self.nbBands == 1

	@property
	def dtype(self):
		'''return string ['int8', 'uint8', 'int16', 'uint16', 'int32', 'uint32', 'float32', 'float64']'''
		return self.data.dtype

	@property
	def isFloat(self):
		return self.dtype in ['float16', 'float32', 'float64']

	def getBand(self, bandIdx=0):
		'''2D array of one band'''
		if self.isOneBand:
			return self.data
		else:
			return self.data[:,:,bandIdx]

	def _npFromBLOB(self, data):
		'''Get Numpy array from Bytes data'''

		if self.IFACE == 'PIL':
			#convert bytes object to bytesio (stream buffer) and open it with PIL
			img = Image.open(io.BytesIO(data))
			data = self._npFromPIL(img)

		elif self.IFACE == 'GDAL':
			#Use a virtual memory file to create gdal dataset from buffer
			#the random name make the function thread safe
			vsipath = '/vsimem/' + uuid.uuid4().hex
			gdal.FileFromMemBuffer(vsipath, data)
			ds = gdal.Open(vsipath)
			if ds is None:
				gdal.Unlink(vsipath)
				raise ValueError('Unable to load image data')
			data = self._npFromGDAL(ds)
			ds = None
			gdal.Unlink(vsipath)

		return data

	def _npFromPIL(self, img):
		'''Get Numpy array from PIL Image instance'''
		if img.mode == 'P': #palette (indexed color)
			img = img.convert('RGBA')
		elif img.mode.startswith('I;16'): #16 bits grayscale, common for elevation png
			img = img.convert('I')
		data = np.array(img) #copy, PIL return a non writable array
		return data

	def _npFromGDAL(self, ds):
		'''Get Numpy array from GDAL dataset instance'''
		data = ds.ReadAsArray()
		if len(data.shape) == 3: #multiband
			data = np.rollaxis(data, 0, 3) # because first axis is band index
		else: #one band raster or indexed color (= palette = pseudo color table (pct))
			ctable = ds.GetRasterBand(1).GetColorTable()
			if ctable is not None:
				#Swap index values to their corresponding color (rgba)
				nbColors = ctable.GetCount()
				values = np.array( [ctable.GetColorEntry(i) for i in range(nbColors)] )
				data = values[data]
			else:
				noData = ds.GetRasterBand(1).GetNoDataValue()
				if noData is not None and self.noData is None:
					self.noData = noData
		return data

	def __repr__(self):
		return '\n'.join([
		"* Data infos :",
		" size {}".format(self.size),
		" type {}".format(self.dtype),
		" number of bands {}".format(self.nbBands),
		" nodata value {}".format(self.noData)
		])
