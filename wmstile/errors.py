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


class WMSError(Exception):
	'''Base class of every error raised by a WMS tile source'''
	def __init__(self, value=''):
		self.value = value
	def __str__(self):
		return repr(self.value)

class CapabilitiesError(WMSError):
	'''GetCapabilities document cannot be fetched or parsed'''
	pass

class TileServiceError(WMSError):
	'''TileService document cannot be fetched or parsed'''
	pass

class ProfileError(WMSError):
	pass

class TileFetchError(WMSError):
	'''A single tile request fails (network, http status or image decoding)'''
	def __init__(self, value='', url=None):
		self.value = value
		self.url = url
