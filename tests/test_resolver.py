import pytest

from wmstile.basemaps.profile import Profile, Registry
from wmstile.basemaps.resolver import ProfileResolver, capabilitiesUrl, tileServiceUrl
from wmstile.basemaps.wmssource import WMSOptions
from wmstile.errors import CapabilitiesError
from wmstile.utils import BBOX


def makeResolver(capsReader, tileServiceReader, registry=None, **options):
	options.setdefault('url', 'http://x/wms')
	options.setdefault('layers', 'basic')
	return ProfileResolver(WMSOptions(options), registry, capsReader, tileServiceReader)


def test_service_urls():
	assert capabilitiesUrl('http://x/wms') == 'http://x/wms?SERVICE=WMS&VERSION=1.1.1&REQUEST=GetCapabilities'
	assert capabilitiesUrl('http://x/wms?map=foo') == 'http://x/wms?map=foo&SERVICE=WMS&VERSION=1.1.1&REQUEST=GetCapabilities'
	assert tileServiceUrl('http://x/wms') == 'http://x/wms?request=GetTileService'


def test_derived_urls(capsReader, noTileServiceReader):
	makeResolver(capsReader, noTileServiceReader).resolve()
	assert capsReader.urls == ['http://x/wms?SERVICE=WMS&VERSION=1.1.1&REQUEST=GetCapabilities']
	assert noTileServiceReader.urls == ['http://x/wms?request=GetTileService']


def test_explicit_urls(capsReader, noTileServiceReader):
	makeResolver(capsReader, noTileServiceReader,
		capabilities_url='http://x/caps.xml', tileservice_url='http://x/ts.xml').resolve()
	assert capsReader.urls == ['http://x/caps.xml']
	assert noTileServiceReader.urls == ['http://x/ts.xml']


def test_canonical_template(capsReader, noTileServiceReader):
	res = makeResolver(capsReader, noTileServiceReader).resolve()
	assert res.format == 'png'
	assert res.srs == 'EPSG:4326'
	assert str(res.template) == 'http://x/wms?SERVICE=WMS&VERSION=1.1.1&REQUEST=GetMap&LAYERS=basic' \
		'&FORMAT=image/png&STYLES=&SRS=EPSG:4326&WIDTH=256&HEIGHT=256&BBOX={xmin},{ymin},{xmax},{ymax}&.png'


def test_default_format_without_suggestion(makeCapsReader, capsNoFormat, noTileServiceReader):
	res = makeResolver(makeCapsReader(capsNoFormat), noTileServiceReader).resolve()
	assert res.format == 'png'
	assert '&FORMAT=image/png&' in res.template.head


def test_explicit_format_and_wms_format(capsReader, noTileServiceReader):
	res = makeResolver(capsReader, noTileServiceReader, format='jpg', wms_format='image/jpeg', style='default', tile_size='512').resolve()
	assert res.format == 'jpg'
	assert '&FORMAT=image/jpeg&STYLES=default&' in res.template.head
	assert '&WIDTH=512&HEIGHT=512&' in res.template.head
	assert res.template.tail == '&.jpg'


def test_same_srs_as_map_reuse_map_profile(capsReader, noTileServiceReader):
	mapProfile = Profile('CRS:84', BBOX(-180, -90, 180, 90), 4, 2)
	res = makeResolver(capsReader, noTileServiceReader, layers='regional').resolve(mapProfile)
	assert res.profile is mapProfile


def test_global_layer_gives_registry_profile(capsReader, noTileServiceReader):
	registry = Registry()
	res = makeResolver(capsReader, noTileServiceReader, registry).resolve()
	assert res.profile is registry.getGlobalGeodeticProfile()


def test_regional_layer(capsReader, noTileServiceReader):
	res = makeResolver(capsReader, noTileServiceReader, layers='regional').resolve()
	assert tuple(res.profile.bbox) == (-10, 40, 10, 50)
	assert (res.profile.tilesWide, res.profile.tilesHigh) == (2, 1)


def test_projected_layer_use_native_bbox(capsReader, noTileServiceReader):
	res = makeResolver(capsReader, noTileServiceReader, layers='regional', srs='EPSG:3857').resolve()
	assert tuple(res.profile.bbox) == (-1113194.9, 4865942.3, 1113194.9, 6446275.8)
	assert res.profile.profileType == Profile.MERCATOR
	assert '&SRS=EPSG:3857&' in res.template.head


def test_global_map_fallback(capsReader, noTileServiceReader):
	registry = Registry()
	mercator = registry.getGlobalMercatorProfile()
	res = makeResolver(capsReader, noTileServiceReader, registry, layers='unknown').resolve(mercator)
	assert res.profile is mercator


def test_no_fallback_for_local_map(capsReader, noTileServiceReader):
	local = Profile('EPSG:32631', BBOX(166000, 0, 834000, 9330000))
	res = makeResolver(capsReader, noTileServiceReader, layers='unknown').resolve(local)
	assert res.profile is None
	assert res.template is not None


def test_tileservice_override(capsReader, tileServiceReader):
	mapProfile = Registry().getGlobalGeodeticProfile()
	res = makeResolver(capsReader, tileServiceReader, layers='regional').resolve(mapProfile)
	assert tuple(res.profile.bbox) == (-10, 30, 10, 50)
	assert (res.profile.tilesWide, res.profile.tilesHigh) == (2, 2)
	assert res.template.head.startswith('http://x/wms?request=GetMap&layers=regional')
	assert str(res.template) == 'http://x/wms?request=GetMap&layers=regional&srs=EPSG:4326&format=image/png' \
		'&styles=&width=256&height=256&bbox={xmin},{ymin},{xmax},{ymax}&.png'


def test_tileservice_without_matching_pattern(capsReader, tileServiceReader):
	res = makeResolver(capsReader, tileServiceReader, tile_size=128).resolve()
	assert res.template.head.startswith('http://x/wms?SERVICE=WMS')
	assert tuple(res.profile.bbox) == (-180, -90, 180, 90)


def test_capabilities_failure_is_fatal(noCapsReader, tileServiceReader):
	with pytest.raises(CapabilitiesError):
		makeResolver(noCapsReader, tileServiceReader).resolve()
	assert tileServiceReader.urls == []


def test_unparsable_srs(capsReader, noTileServiceReader):
	mapProfile = Registry().getGlobalGeodeticProfile()
	res = makeResolver(capsReader, noTileServiceReader, srs='garbage').resolve(mapProfile)
	assert res.profile is None
	assert '&SRS=garbage&' in res.template.head


def test_custom_strategies(capsReader, noTileServiceReader):
	calls = []
	fixed = Profile('EPSG:4326', BBOX(0, 0, 10, 10))

	def declining(ctx):
		calls.append('declining')
		return None

	def accepting(ctx):
		calls.append('accepting')
		return fixed

	def never(ctx):
		calls.append('never')

	resolver = makeResolver(capsReader, noTileServiceReader)
	resolver.strategies = [declining, accepting, never]
	assert resolver.resolve().profile is fixed
	assert calls == ['declining', 'accepting']


DEGENERATE_CAPS = b"""<WMT_MS_Capabilities version="1.1.1">
	<Capability>
		<Layer>
			<Name>pt</Name>
			<LatLonBoundingBox minx="5" miny="45" maxx="10" maxy="45"/>
		</Layer>
	</Capability>
</WMT_MS_Capabilities>"""


def test_empty_layer_extent_gives_no_profile(makeCapsReader, noTileServiceReader):
	res = makeResolver(makeCapsReader(DEGENERATE_CAPS), noTileServiceReader, layers='pt').resolve()
	assert res.profile is None


def test_empty_layer_extent_fallback_to_map(makeCapsReader, noTileServiceReader):
	mercator = Registry().getGlobalMercatorProfile()
	res = makeResolver(makeCapsReader(DEGENERATE_CAPS), noTileServiceReader, layers='pt').resolve(mercator)
	assert res.profile is mercator


def test_template_values_are_encoded(capsReader, noTileServiceReader):
	res = makeResolver(capsReader, noTileServiceReader, layers='roads,rivers', style='my style').resolve()
	assert '&LAYERS=roads,rivers&' in res.template.head
	assert '&STYLES=my%20style&' in res.template.head
	assert ' ' not in res.template.render((0, 0, 1, 1))
