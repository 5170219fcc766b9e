"""Module banners carry the project author and license lines."""

import importlib

import pytest

BANNERED = ["accelerometer", "tilt_bridge", "main_pi_prod", "main_pc_sim", "adapters.zmq_tilt"]


@pytest.mark.parametrize("name", BANNERED)
def test_banner_names_license(name):
    doc = importlib.import_module(name).__doc__
    assert "Author: Discover DXB Team" in doc
    assert "License: MIT" in doc
