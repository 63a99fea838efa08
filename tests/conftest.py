#!/usr/bin/env python3

"""
Pytest configuration and shared fixtures for repo-localizer test suite.
"""

import os
import sys
import tempfile
import pytest
from unittest.mock import Mock
from pathlib import Path

# Add src to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from repo_localizer.config.manager import LocalizerConfig
from repo_localizer.mirrors.fetcher import MirrorListFetcher


REMI_REPO = """[remi]
name=Remi's RPM repository for Enterprise Linux $releasever - $basearch
#baseurl=http://rpms.remirepo.net/enterprise/$releasever/remi/$basearch/
mirrorlist=http://cdn.remirepo.net/enterprise/$releasever/remi/mirror
enabled=1
gpgcheck=1
gpgkey=file:///etc/pki/rpm-gpg/RPM-GPG-KEY-remi

[remi-safe]
name=Safe Remi's RPM repository for Enterprise Linux $releasever - $basearch
baseurl=http://rpms.remirepo.net/enterprise/$releasever/safe/$basearch/
enabled=1
gpgcheck=1
"""

AMZN_REPO = """[amzn-main]
name=amzn-main-Base
mirrorlist=http://repo.$awsregion.$awsdomain/$releasever/main/mirror.list
enabled=1

[amzn-extras]
name=amzn-extras
mirrorlist=http://repo.$awsregion.$awsdomain/$releasever/extras/mirror.list
enabled=1
"""

REMI_MIRRORLIST = """# remi mirrorlist
http://mirror.bebout.net/remi/enterprise/7/remi/x86_64/
http://ftp.riken.jp/Linux/remi/enterprise/7/remi/x86_64/
http://repo1.sea.innoscale.net/remi/enterprise/7/remi/x86_64/
"""

EPEL_METALINK = """<?xml version="1.0" encoding="utf-8"?>
<metalink version="3.0" xmlns="http://www.metalinker.org/">
 <files>
  <file name="repomd.xml">
   <resources maxconnections="1">
    <url protocol="http" type="http" location="US" preference="100">http://mirror.example.com/epel/7/x86_64/repodata/repomd.xml</url>
    <url protocol="https" type="https" location="JP" preference="100">https://ftp.iij.ad.jp/pub/linux/epel/7/x86_64/repodata/repomd.xml</url>
    <url protocol="http" type="http" location="JP" preference="99">http://ftp.jaist.ac.jp/pub/Linux/Fedora/epel/7/x86_64/repodata/repomd.xml</url>
   </resources>
  </file>
 </files>
</metalink>
"""


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that gets cleaned up after test"""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir

    # Cleanup
    import shutil
    if os.path.exists(temp_dir):
        shutil.rmtree(temp_dir)


@pytest.fixture
def sample_config():
    """Provide the default configuration"""
    return LocalizerConfig()


@pytest.fixture
def repos_config(temp_dir):
    """Provide a configuration with source and destination inside temp_dir"""
    repos_dir = os.path.join(temp_dir, "yum.repos.d")
    os.makedirs(repos_dir)
    return LocalizerConfig(
        repos_dir=repos_dir,
        dest_path=os.path.join(temp_dir, "dest"),
        bucket="mirror-bucket",
        base_path="https://mirror.example.net",
    )


@pytest.fixture
def write_repo_file(repos_config):
    """Write a .repo file into the configured source directory"""
    def _write(name: str, content: str) -> str:
        path = os.path.join(repos_config.repos_dir, name)
        with open(path, 'w') as f:
            f.write(content)
        return path
    return _write


@pytest.fixture
def mock_fetcher():
    """Provide a mock MirrorListFetcher returning no URLs by default"""
    fetcher = Mock(spec=MirrorListFetcher)
    fetcher.get_mirror_urls.return_value = []
    return fetcher


@pytest.fixture
def first_choice():
    """Chooser that always picks the first candidate"""
    return lambda urls: urls[0]


@pytest.fixture
def last_choice():
    """Chooser that always picks the last candidate"""
    return lambda urls: urls[-1]


@pytest.fixture(autouse=True)
def setup_logging():
    """Set up logging for tests"""
    import logging

    # Set up basic logging for tests
    logging.basicConfig(
        level=logging.WARNING,  # Only show warnings and errors in tests
        format="%(name)s - %(levelname)s - %(message)s"
    )

    # Silence some noisy loggers during tests
    logging.getLogger("urllib3").setLevel(logging.ERROR)


def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test names"""
    for item in items:
        # Add integration marker to integration test classes
        if "Integration" in item.cls.__name__ if item.cls else False:
            item.add_marker(pytest.mark.integration)
