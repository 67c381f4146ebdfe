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

from urllib.parse import quote


def quoteParam(value):
	'''Percent-encode a query parameter value, already encoded sequences are kept'''
	return quote(value, safe=',:/%')


def getSeparator(url):
	'''Char used to append a query string to url'''
	return '&' if '?' in url else '?'


class RequestTemplate():
	"""
	Reusable GetMap request with a single bounding box slot

	The url is split around the slot, rendering a tile only write the
	four coordinates (xmin, ymin, xmax, ymax) as fixed point decimals
	between the two fixed parts. The parts are never reinterpreted so
	any percent-encoded character of the service url is kept untouched.
	"""

	def __init__(self, head, tail=''):
		self.head = head
		self.tail = tail

	@classmethod
	def fromUrl(cls, url, bboxParam='BBOX'):
		'''
		Build a template from a complete request url by replacing
		the value of its bbox parameter with the slot
		'''
		start = 0
		key = bboxParam.lower() + '='
		lurl = url.lower()
		while True:
			idx = lurl.find(key, start)
			if idx == -1:
				raise ValueError('No {} parameter in {}'.format(bboxParam, url))
			if idx == 0 or lurl[idx-1] in '?&':
				break
			start = idx + 1
		valueStart = idx + len(key)
		valueEnd = url.find('&', valueStart)
		if valueEnd == -1:
			valueEnd = len(url)
		return cls(url[:valueStart], url[valueEnd:])

	def withSuffix(self, suffix):
		return RequestTemplate(self.head, self.tail + suffix)

	def withPrefix(self, prefix):
		return RequestTemplate(prefix + self.head, self.tail)

	def render(self, bbox):
		'''Fill the slot with a BBOX or any (xmin, ymin, xmax, ymax) sequence'''
		xmin, ymin, xmax, ymax = bbox
		return '{}{:f},{:f},{:f},{:f}{}'.format(self.head, xmin, ymin, xmax, ymax, self.tail)

	def __str__(self):
		return self.head + '{xmin},{ymin},{xmax},{ymax}' + self.tail

	def __repr__(self):
		return 'RequestTemplate({!r}, {!r})'.format(self.head, self.tail)

	def __eq__(self, other):
		return isinstance(other, RequestTemplate) and self.head == other.head and self.tail == other.tail

	def __hash__(self):
		return hash((self.head, self.tail))
