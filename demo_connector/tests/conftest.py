# -*- coding: utf-8 -*-
"""
Fixtures compartidos para los tests del conector
"""

import pytest

from demo_connector.tests.factories import make_channel, make_channel_product


@pytest.fixture
def channel():
    return make_channel()


@pytest.fixture
def channel_products():
    return [
        make_channel_product(1, title='Laptop Dell XPS 13', sku='DELL-XPS13-001'),
        make_channel_product(2, title='Mouse Logitech MX Master 3', sku='LOG-MX3-002'),
    ]
