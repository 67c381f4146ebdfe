import io

import numpy as np
import pytest
from PIL import Image

from wmstile.basemaps.capabilities import CapabilitiesReader
from wmstile.basemaps.tileservice import TileServiceReader
from wmstile.errors import CapabilitiesError, TileServiceError, TileFetchError
from wmstile.georaster import NpImage


CAPS_111 = b"""<?xml version="1.0" encoding="UTF-8"?>
<WMT_MS_Capabilities version="1.1.1">
	<Service>
		<Name>OGC:WMS</Name>
		<Title>Test map server</Title>
	</Service>
	<Capability>
		<Request>
			<GetCapabilities><Format>application/vnd.ogc.wms_xml</Format></GetCapabilities>
			<GetMap>
				<Format>application/vnd.google-earth.kml+xml</Format>
				<Format>image/png</Format>
				<Format>image/jpeg</Format>
			</GetMap>
		</Request>
		<Layer>
			<Title>Root</Title>
			<SRS>EPSG:4326 EPSG:3857</SRS>
			<LatLonBoundingBox minx="-180" miny="-90" maxx="180" maxy="90"/>
			<Layer>
				<Name>basic</Name>
				<Title>Basic world map</Title>
				<LatLonBoundingBox minx="-180" miny="-90" maxx="180" maxy="90"/>
			</Layer>
			<Layer>
				<Name>regional</Name>
				<Title>Regional map</Title>
				<LatLonBoundingBox minx="-10" miny="40" maxx="10" maxy="50"/>
				<BoundingBox SRS="EPSG:3857" minx="-1113194.9" miny="4865942.3" maxx="1113194.9" maxy="6446275.8"/>
			</Layer>
			<Layer>
				<Name>inherited</Name>
				<Title>Layer without extent</Title>
			</Layer>
		</Layer>
	</Capability>
</WMT_MS_Capabilities>
"""

CAPS_130 = b"""<?xml version="1.0" encoding="UTF-8"?>
<WMS_Capabilities version="1.3.0" xmlns="http://www.opengis.net/wms">
	<Service>
		<Name>WMS</Name>
		<Title>Namespaced server</Title>
	</Service>
	<Capability>
		<Request>
			<GetMap>
				<Format>image/jpeg</Format>
				<Format>image/png</Format>
			</GetMap>
		</Request>
		<Layer>
			<Title>Root</Title>
			<Layer>
				<Name>dem</Name>
				<CRS>EPSG:4326</CRS>
				<EX_GeographicBoundingBox>
					<westBoundLongitude>5</westBoundLongitude>
					<eastBoundLongitude>10</eastBoundLongitude>
					<southBoundLatitude>45</southBoundLatitude>
					<northBoundLatitude>48</northBoundLatitude>
				</EX_GeographicBoundingBox>
				<BoundingBox CRS="EPSG:4326" minx="45" miny="5" maxx="48" maxy="10"/>
			</Layer>
		</Layer>
	</Capability>
</WMS_Capabilities>
"""

CAPS_NO_FORMAT = b"""<?xml version="1.0" encoding="UTF-8"?>
<WMT_MS_Capabilities version="1.1.1">
	<Capability>
		<Request>
			<GetMap><Format>application/vnd.google-earth.kml+xml</Format></GetMap>
		</Request>
		<Layer>
			<Name>basic</Name>
			<LatLonBoundingBox minx="-180" miny="-90" maxx="180" maxy="90"/>
		</Layer>
	</Capability>
</WMT_MS_Capabilities>
"""

TILESERVICE = b"""<?xml version="1.0" encoding="UTF-8"?>
<WMS_Tile_Service version="0.1.0">
	<Service>
		<Name>WMS</Name>
		<Title>Test tile service</Title>
	</Service>
	<TiledPatterns>
		<LatLonBoundingBox minx="-180" miny="-90" maxx="180" maxy="90"/>
		<TiledGroup>
			<Name>Basic world map</Name>
			<Title>basic</Title>
			<TilePattern>
			request=GetMap&amp;layers=basic&amp;srs=EPSG:4326&amp;format=image/png&amp;styles=&amp;width=256&amp;height=256&amp;bbox=-180,-90,0,90
			request=GetMap&amp;layers=basic&amp;srs=EPSG:4326&amp;format=image/png&amp;styles=&amp;width=256&amp;height=256&amp;bbox=0,-90,180,90
			</TilePattern>
			<TilePattern>request=GetMap&amp;layers=basic&amp;srs=EPSG:4326&amp;format=image/png&amp;styles=&amp;width=256&amp;height=256&amp;bbox=-180,0,-90,90</TilePattern>
			<TilePattern>request=GetMap&amp;layers=basic&amp;srs=EPSG:4326&amp;format=image/jpeg&amp;styles=&amp;width=512&amp;height=512&amp;bbox=-180,-90,0,90</TilePattern>
		</TiledGroup>
		<TiledGroup>
			<Name>Regional map</Name>
			<LatLonBoundingBox minx="-10" miny="35" maxx="10" maxy="50"/>
			<TilePattern>request=GetMap&amp;layers=regional&amp;srs=EPSG:4326&amp;format=image/png&amp;styles=&amp;width=256&amp;height=256&amp;bbox=-10,40,0,50</TilePattern>
			<TilePattern>request=GetMap&amp;layers=regional&amp;srs=EPSG:4326&amp;format=image/png&amp;styles=&amp;width=256&amp;height=256&amp;bbox=-10,45,-5,50</TilePattern>
		</TiledGroup>
		<TiledGroup>
			<Name>Duplicate basic</Name>
			<TilePattern>request=GetMap&amp;layers=basic&amp;srs=EPSG:4326&amp;format=image/png&amp;styles=&amp;width=256&amp;height=256&amp;bbox=-180,-90,-90,0</TilePattern>
		</TiledGroup>
	</TiledPatterns>
</WMS_Tile_Service>
"""


class FakeCapabilitiesReader():
	'''Serve a capabilities document from memory and remember requested urls'''

	def __init__(self, data=None):
		self.data = data
		self.urls = []

	def read(self, url):
		self.urls.append(url)
		if self.data is None:
			raise CapabilitiesError('Unable to fetch ' + url)
		return CapabilitiesReader.readString(self.data)


class FakeTileServiceReader():

	def __init__(self, data=None):
		self.data = data
		self.urls = []

	def read(self, url):
		self.urls.append(url)
		if self.data is None:
			raise TileServiceError('Unable to fetch ' + url)
		return TileServiceReader.readString(self.data)


class FakeImageReader():
	'''Return a constant elevation image, or fail for urls listed in failing'''

	def __init__(self, data=None, failing=()):
		if data is None:
			data = np.arange(16, dtype='float32').reshape(4, 4)
		self.data = data
		self.failing = failing
		self.urls = []

	def __call__(self, url):
		self.urls.append(url)
		if any(f in url for f in self.failing):
			raise TileFetchError('Http error 404', url)
		return NpImage(self.data.copy())


def pngBytes(array):
	b = io.BytesIO()
	Image.fromarray(array).save(b, format='PNG')
	return b.getvalue()


@pytest.fixture
def capsReader():
	return FakeCapabilitiesReader(CAPS_111)

@pytest.fixture
def noCapsReader():
	return FakeCapabilitiesReader(None)

@pytest.fixture
def tileServiceReader():
	return FakeTileServiceReader(TILESERVICE)

@pytest.fixture
def noTileServiceReader():
	return FakeTileServiceReader(None)

@pytest.fixture
def imageReader():
	return FakeImageReader()

@pytest.fixture
def makeImageReader():
	return FakeImageReader

@pytest.fixture
def makeCapsReader():
	return FakeCapabilitiesReader

@pytest.fixture
def makeTileServiceReader():
	return FakeTileServiceReader

@pytest.fixture
def makePng():
	return pngBytes

@pytest.fixture
def caps111():
	return CAPS_111

@pytest.fixture
def caps130():
	return CAPS_130

@pytest.fixture
def capsNoFormat():
	return CAPS_NO_FORMAT

@pytest.fixture
def tileServiceDoc():
	return TILESERVICE
