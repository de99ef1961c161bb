"""Tests for enclosure construction and record parsing."""

import json

import pytest

from boxsim.constants import EnclosureType
from boxsim.enclosure import SealedEnclosure, VentedEnclosure, create_enclosure, enclosure_from_record
from boxsim.exceptions import EnclosureCreationError


class TestCreateEnclosure:

    def test_sealed(self):
        enclosure = create_enclosure(EnclosureType.SEALED)
        assert isinstance(enclosure, SealedEnclosure)
        assert enclosure.type == EnclosureType.SEALED
        assert enclosure.volume == 0.0
        assert enclosure.leakage_q is None

    def test_vented_from_string(self):
        enclosure = create_enclosure('Vented')
        assert isinstance(enclosure, VentedEnclosure)
        assert enclosure.tuning_frequency is None

    def test_unknown_type(self):
        with pytest.raises(EnclosureCreationError) as exc_info:
            create_enclosure('Horn')
        assert exc_info.value.path == 'type'

    def test_set_volume(self):
        enclosure = create_enclosure(EnclosureType.SEALED)
        enclosure.set_volume(25.0)
        assert enclosure.volume == 25.0
        assert enclosure.volume_m3() == pytest.approx(0.025)


class TestEnclosureRecords:

    def test_sealed_record(self):
        enclosure = enclosure_from_record({
            'type': 'Sealed',
            'volume': {'value': 20.0, 'unit': 'L'},
            'leakage_q': 10.0,
        })
        assert isinstance(enclosure, SealedEnclosure)
        assert enclosure.volume == pytest.approx(20.0)
        assert enclosure.leakage_q == 10.0

    def test_volume_unit_conversion(self):
        enclosure = enclosure_from_record({'type': 'Sealed', 'volume': {'value': 1.0, 'unit': 'ft3'}})
        assert enclosure.volume == pytest.approx(28.3168)

    def test_vented_record_from_json(self):
        text = json.dumps({
            'type': 'Vented',
            'volume': {'value': 40.0, 'unit': 'L'},
            'tuning_frequency': {'value': 32.0, 'unit': 'Hz'},
        })
        enclosure = enclosure_from_record(text)
        assert isinstance(enclosure, VentedEnclosure)
        assert enclosure.tuning_frequency == 32.0
        assert enclosure.leakage_q is None

    def test_to_dict_parses_back(self):
        enclosure = VentedEnclosure(volume=40.0, tuning_frequency=32.0, leakage_q=7.0)
        data = enclosure.to_dict()
        assert data == {
            'type': 'Vented',
            'volume': {'value': 40.0, 'unit': 'L'},
            'leakage_q': 7.0,
            'tuning_frequency': {'value': 32.0, 'unit': 'Hz'},
        }
        rebuilt = enclosure_from_record(enclosure.to_json())
        assert rebuilt.volume == pytest.approx(40.0)
        assert rebuilt.tuning_frequency == 32.0

    def test_missing_volume(self):
        with pytest.raises(EnclosureCreationError) as exc_info:
            enclosure_from_record({'type': 'Sealed'})
        assert exc_info.value.path == 'volume'

    def test_mistyped_leakage(self):
        with pytest.raises(EnclosureCreationError) as exc_info:
            enclosure_from_record({
                'type': 'Sealed',
                'volume': {'value': 20.0, 'unit': 'L'},
                'leakage_q': 'high',
            })
        assert exc_info.value.path == 'leakage_q'

    def test_unknown_type(self):
        with pytest.raises(EnclosureCreationError):
            enclosure_from_record({'type': 'Bandpass', 'volume': {'value': 20.0, 'unit': 'L'}})

    def test_invalid_json(self):
        with pytest.raises(EnclosureCreationError):
            enclosure_from_record('{"type": ')

    def test_repr(self):
        assert repr(SealedEnclosure(12.5)) == 'SealedEnclosure(volume=12.5 L)'
