"""Shared fixtures for deploy-changed-functions tests."""

import json
import stat

import pytest

from .fakes import FakeRunner, write_files


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def firebase_bin(tmp_path):
    """An executable placeholder so shutil.which resolves the firebase binary."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    firebase = bin_dir / "firebase"
    firebase.write_text("#!/bin/sh\nexit 0\n")
    firebase.chmod(firebase.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(firebase)


@pytest.fixture
def workspace(tmp_path):
    """A repository with a functions folder holding three function folders."""
    root = tmp_path / "repo"
    write_files(root, {
        "firebase.json": json.dumps({
            "functions": {"source": "functions", "predeploy": ["npm run build"]}
        }),
        "functions/package.json": '{"name": "functions"}\n',
        "functions/src/sendEmail/index.js": "exports.sendEmail = () => 1;\n",
        "functions/src/sendEmail/lib.js": "module.exports = {};\n",
        "functions/src/cleanup/index.js": "exports.cleanup = () => 2;\n",
        "functions/src/utils/helpers.js": "exports.help = () => 3;\n",
    })
    return root


@pytest.fixture
def bucket(tmp_path):
    return tmp_path / "bucket"
