"""Pytest configuration and fixtures."""
import pytest
import tempfile
import os
import shutil


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    temp = tempfile.mkdtemp()
    yield temp
    shutil.rmtree(temp)


@pytest.fixture
def site_root(temp_dir):
    """Create a small static site under temp_dir/www."""
    root = os.path.join(temp_dir, 'www')
    os.makedirs(os.path.join(root, 'assets', 'images'))
    with open(os.path.join(root, 'assets', 'images', 'logo.png'), 'wb') as f:
        f.write(b'png')
    with open(os.path.join(root, 'index.html'), 'w') as f:
        f.write('<html>')
    return root


@pytest.fixture
def outside_dir(temp_dir):
    """A directory next to the site root holding a secret."""
    outside = os.path.join(temp_dir, 'outside')
    os.makedirs(outside)
    with open(os.path.join(outside, 'secret.txt'), 'w') as f:
        f.write('secret')
    return outside


@pytest.fixture
def sample_config(temp_dir, site_root):
    """Create a sample configuration file."""
    config_content = f"""
rootPath: "{site_root}"
allowSymlinks: false

listing:
  enabled: true
  showHidden: false

logging:
  level: "DEBUG"
"""
    config_path = os.path.join(temp_dir, 'config.yaml')
    with open(config_path, 'w') as f:
        f.write(config_content)
    return config_path


@pytest.fixture
def make_symlink():
    """Return a helper that creates a symlink, skipping where unsupported."""
    def _make(target, link):
        try:
            os.symlink(target, link)
        except (OSError, NotImplementedError) as e:
            pytest.skip(f"symlinks not supported: {e}")
    return _make
