"""Tests for utp package."""


def test_package_imports():
    """Test that the package can be imported successfully."""
    import utp

    assert utp is not None


def test_package_version():
    """Test that the package has a version string."""
    from utp import __version__

    assert __version__ == "1.0.0"


def test_plugin_entry_points():
    """Test that the host entry points are exposed by utp.plugin."""
    from utp import plugin

    assert callable(plugin.register)
    assert callable(plugin.unregister)
