# -*- coding: utf-8 -*-
import doctest

import pytest

import srecfix
import srecfix.checksum
import srecfix.config
import srecfix.document
import srecfix.records
import srecfix.session
import srecfix.utils


@pytest.mark.parametrize('module', [
    srecfix.checksum,
    srecfix.config,
    srecfix.document,
    srecfix.records,
    srecfix.session,
    srecfix.utils,
])
def test_doctest(module):
    failed, _ = doctest.testmod(module)
    assert failed == 0


def test_exports():
    assert srecfix.compute_expected_checksum is srecfix.checksum.compute_expected_checksum
    assert srecfix.extract_declared_checksum is srecfix.checksum.extract_declared_checksum
    assert srecfix.scan is srecfix.document.scan
    assert srecfix.repair is srecfix.document.repair
    assert srecfix.find_address is srecfix.document.find_address


def test_version():
    assert isinstance(srecfix.__version__, str)
    assert srecfix.__version__.count('.') == 2
