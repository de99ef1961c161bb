import copy
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))


# 8" woofer: Fs=40 Hz, Mms=15 g, Re=6 Ω, Bl=7.5 T·m, Qms=3.5, Sd=200 cm²
WOOFER_RECORD = {
    'general_info': {
        'uuid': '3f0c2a57-8d7e-4b8e-9a43-5c1f7d2e6b10',
        'brand': 'Acme',
        'manufacturer': 'Acme Audio',
        'providedby': 'datasheet',
        'comment': '',
        'model': 'W8-100',
        'indexed': True,
        'speaker_type': 'Woofer',
    },
    'electrical_parameters': {
        're': {'value': 6.0, 'unit': 'Ohm'},
        'bl': {'value': 7.5, 'unit': 'Tm'},
        'impedance': {'value': 8.0, 'unit': 'Ohm'},
        'le': {'value': 0.0005, 'unit': 'H'},
        'znom': {'value': 8.0, 'unit': 'Ohm'},
        'pe': {'value': 60.0, 'unit': 'W'},
        'pmax': {'value': 120.0, 'unit': 'W'},
        'motor_constant': {'value': 3.06, 'unit': 'N/sqrt(W)'},
        'flux_density': {'value': 1.1, 'unit': 'T'},
    },
    'thiele_small_parameters': {
        'fs': {'value': 40.0, 'unit': 'Hz'},
        'qms': {'value': 3.5, 'unit': ''},
        'mms': {'value': 15.0, 'unit': 'g'},
        'sd': {'value': 200.0, 'unit': 'cm2'},
        'mmd': {'value': 13.0, 'unit': 'g'},
        'rms': {'value': 1.08, 'unit': 'kg/s'},
        'xmax': {'value': 5.0, 'unit': 'mm'},
        'xlim': {'value': 10.0, 'unit': 'mm'},
    },
    'physical_dimensions': {
        'nominal_diameter': '8"',
        'vc_diameter': {'value': 38.0, 'unit': 'mm'},
        'winding_height': {'value': 12.0, 'unit': 'mm'},
        'air_gap_height': {'value': 6.0, 'unit': 'mm'},
        'effective_diameter': {'value': 16.0, 'unit': 'cm'},
        'baffle_cutout_diameter': {'value': 183.0, 'unit': 'mm'},
        'volume_occupied': {'value': 0.9, 'unit': 'L'},
        'net_weight': {'value': 2.1, 'unit': 'kg'},
        'material': 'paper',
    },
}


def build_record(speaker_type='Woofer', uuid=None, drop=(), **sections):
    """
    Copy of WOOFER_RECORD.

    `drop` holds (section, key) pairs to delete, or a bare section name.
    Keyword arguments name a section and map keys to replacement values.
    """
    record = copy.deepcopy(WOOFER_RECORD)
    record['general_info']['speaker_type'] = speaker_type
    if uuid is not None:
        record['general_info']['uuid'] = uuid
    for section, values in sections.items():
        record[section].update(values)
    for item in drop:
        if isinstance(item, str):
            del record[item]
        else:
            del record[item[0]][item[1]]
    return record


@pytest.fixture
def make_record():
    return build_record


@pytest.fixture
def woofer_record():
    return build_record()


@pytest.fixture
def woofer(woofer_record):
    from boxsim.driver import driver_from_record
    return driver_from_record(woofer_record)
