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

#built-in imports
import logging
log = logging.getLogger(__name__)

import urllib.request
from http.client import HTTPException
from urllib.error import URLError, HTTPError

#core imports
from ..georaster import NpImage
from ..errors import TileFetchError
from ..settings import settings


def buildHeaders(accept='image/png,image/*;q=0.8,*/*;q=0.5'):
	return {
		'Accept' : accept,
		'Accept-Charset' : 'ISO-8859-1,utf-8;q=0.7,*;q=0.7',
		'User-Agent' : settings.user_agent}


def isLocalPath(url):
	return '://' not in url and not url.lower().startswith('file:')


def downloadData(url, accept='*/*'):
	"""
	Get the raw bytes behind an url or a local file path
	Errors are not catched here, callers decide what a failure means for them
	"""
	log.debug(url)
	if isLocalPath(url):
		with open(url, 'rb') as f:
			return f.read()
	req = urllib.request.Request(url, None, buildHeaders(accept))
	timeout = settings.http_timeout
	if timeout is None:
		handle = urllib.request.urlopen(req)
	else:
		handle = urllib.request.urlopen(req, timeout=timeout)
	with handle:
		return handle.read()


def isServiceException(data):
	'''WMS servers report errors with an xml document, often with a 200 status'''
	head = data[:512].lstrip()
	return head.startswith(b'<') and b'ServiceException' in data[:4096]


def readImage(url):
	"""
	Download and decode the image behind url
	Raise TileFetchError if unable to get a valid image
	"""
	try:
		data = downloadData(url, accept='image/png,image/*;q=0.8,*/*;q=0.5')
	except HTTPError as e:
		log.error("Can't download tile, http error {}".format(e.code))
		raise TileFetchError('Http error {}'.format(e.code), url) from e
	except (URLError, OSError, HTTPException, ValueError) as e:
		log.error("Can't download tile. Error {}".format(e))
		raise TileFetchError(str(e), url) from e

	if not data:
		raise TileFetchError('Empty response', url)

	if isServiceException(data):
		msg = data.decode('utf-8', 'replace').strip()
		log.debug("Service exception for request {} : {}".format(url, msg))
		raise TileFetchError('WMS service exception', url)

	try:
		return NpImage(data)
	except (ValueError, OSError) as e:
		log.debug("Invalid tile data for request {}".format(url))
		raise TileFetchError('Invalid image data', url) from e
