# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import json
import logging
import os

from jsonschema import Draft4Validator as Validator
from pytest import fixture, skip

from slidediff.tree import load


pjoin = os.path.join

schema_dir = os.path.abspath(pjoin(os.path.dirname(__file__), ".."))


def testspath():
    return os.path.abspath(os.path.dirname(__file__))


@fixture
def slow(request):
    if request.config.getoption('--quick', default=False):
        skip('skipping slow test')


@fixture(scope='session')
def filespath():
    return os.path.join(testspath(), "files")


@fixture(autouse=True)
def isolated_config(tmpdir, monkeypatch):
    # Keep user config files out of the tests
    config_dir = tmpdir.join('user-config')
    monkeypatch.setenv('SLIDEDIFF_CONFIG_DIR', str(config_dir))
    return config_dir


@fixture
def reset_log():
    # clear root logger handlers before test and reset afterwards
    handlers = list(logging.getLogger().handlers)
    logging.getLogger().handlers[:] = []
    yield
    logging.getLogger().handlers[:] = handlers


@fixture
def base_deck(filespath):
    return load(pjoin(filespath, "base-deck.json"))


@fixture
def modified_deck(filespath):
    return load(pjoin(filespath, "modified-deck.json"))


@fixture
def json_schema_changeset(request):
    schema_path = os.path.join(schema_dir, 'changeset_schema.json')
    with io.open(schema_path, encoding="utf8") as f:
        schema_json = json.load(f)
    return schema_json


@fixture
def changeset_validator(request, json_schema_changeset):
    return Validator(json_schema_changeset)
