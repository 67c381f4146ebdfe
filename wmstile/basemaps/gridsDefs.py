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

#Half of the GRS80 equator length, bound of the spherical mercator square
wm_half = 20037508.342789244

####################################

#        Profiles definitions

####################################

#A profile is a grid anchored on its upper left corner ("NW" origin)
#At level zero the bbox is split in tilesWide x tilesHigh tiles and each
#next level split every tile in four

GRIDS = {

	"GLOBAL_GEODETIC" : {
		"name" : 'Global geodetic',
		"description" : 'Whole earth in wgs84 longitude latitude, two square tiles at level zero',
		"CRS": 'EPSG:4326',
		"bbox": [-180, -90, 180, 90], #w,s,e,n
		"tilesWide": 2,
		"tilesHigh": 1
	},

	"GLOBAL_MERCATOR" : {
		"name" : 'Global mercator',
		"description" : 'Whole earth in spherical mercator, one tile at level zero',
		"CRS": 'EPSG:3857',
		"bbox": [-wm_half, -wm_half, wm_half, wm_half], #w,s,e,n
		"tilesWide": 1,
		"tilesHigh": 1
	},

}
