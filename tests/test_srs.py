import pytest

from wmstile.proj import SRS


def test_parse_epsg_code():
	srs = SRS(4326)
	assert srs.auth == 'EPSG'
	assert srs.code == 4326
	assert srs.SRID == 'EPSG:4326'
	assert str(SRS('epsg:3857')) == 'EPSG:3857'


def test_parse_proj4():
	srs = SRS('+proj=longlat +datum=WGS84 +no_defs')
	assert not srs.isSRID
	assert srs.isGeo


def test_invalid_crs():
	assert not SRS.validate('not a crs')
	assert not SRS.validate('EPSG:abc')
	with pytest.raises(ValueError):
		SRS('')


def test_legacy_mercator_codes():
	assert SRS('EPSG:900913') == SRS('EPSG:3857')
	assert SRS(3785).isWM


def test_geographic():
	assert SRS('EPSG:4326').isGeo
	assert SRS('CRS:84').isGeo
	assert SRS('EPSG:4269').isGeo
	assert not SRS('EPSG:3857').isGeo
	assert not SRS('EPSG:32631').isGeo


def test_equivalence():
	assert SRS('EPSG:4326').isEquivalentTo(SRS('epsg:4326'))
	assert SRS('EPSG:4326').isEquivalentTo('CRS:84')
	assert SRS('EPSG:3857').isEquivalentTo('EPSG:900913')
	assert not SRS('EPSG:4326').isEquivalentTo(SRS('EPSG:3857'))
	assert not SRS('EPSG:4326').isEquivalentTo(None)


def test_unknown_code_fails_on_use():
	srs = SRS('EPSG:999999')
	with pytest.raises(ValueError):
		srs.isGeo
