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


class BBOX():
	'''
	A 2D extent expressed in the units of its spatial reference
	Values are always ordered xmin, ymin, xmax, ymax (bottom left to upper right)
	'''

	def __init__(self, *args, **kwargs):
		'''
		Three ways for init a BBOX class:
		- from four values >> BBOX(xmin, ymin, xmax, ymax)
		- from a 4-tuple >> BBOX( (xmin, ymin, xmax, ymax) )
		- from keyword arguments >> BBOX(xmin=, ymin=, xmax=, ymax=)
		'''
		if args:
			if len(args) == 1:
				args = args[0]
			if len(args) != 4:
				raise ValueError('BBOX() initialization expects 4 values, got %g' % len(args))
			xmin, ymin, xmax, ymax = args
		elif kwargs:
			if not all( [kw in kwargs for kw in ['xmin', 'ymin', 'xmax', 'ymax']] ):
				raise ValueError('invalid keyword arguments')
			xmin, ymin, xmax, ymax = kwargs['xmin'], kwargs['ymin'], kwargs['xmax'], kwargs['ymax']
		else:
			raise ValueError('BBOX() initialization expects 4 values')
		self.xmin, self.ymin = float(xmin), float(ymin)
		self.xmax, self.ymax = float(xmax), float(ymax)

	@classmethod
	def fromString(cls, s, sep=','):
		'''Parse "minx,miny,maxx,maxy" as found in a WMS BBOX parameter'''
		values = [v for v in s.strip().split(sep) if v.strip()]
		if len(values) != 4:
			raise ValueError('Invalid bbox string : ' + s)
		return cls(*[float(v) for v in values])

	def __str__(self):
		return 'xmin:%g, ymin:%g, xmax:%g, ymax:%g' % tuple(self)

	def __repr__(self):
		return 'BBOX(%r, %r, %r, %r)' % tuple(self)

	def __iter__(self):
		'''allows unpacking and conversion to tuple or list'''
		return iter([self.xmin, self.ymin, self.xmax, self.ymax])

	def __getitem__(self, idx):
		return tuple(self)[idx]

	def __eq__(self, bb):
		'''Exact comparison, no tolerance'''
		try:
			return tuple(self) == tuple(bb)
		except TypeError:
			return NotImplemented

	def __hash__(self):
		return hash(tuple(self))

	@property
	def width(self):
		return self.xmax - self.xmin

	@property
	def height(self):
		return self.ymax - self.ymin

	@property
	def isValid(self):
		return self.xmax > self.xmin and self.ymax > self.ymin

	@property
	def ul(self):
		'''Upper left corner (xmin, ymax)'''
		return (self.xmin, self.ymax)
