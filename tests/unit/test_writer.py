"""
Unit tests for writing stores out.
"""

import os
import tempfile
from pathlib import Path

import pytest
import yaml

from hierconf.store.store import Store
from hierconf.store.writer import dump, dumps, dump_yaml, quote, render_key
from hierconf.syntax.parser import parse_text
from hierconf.errors import ConfigLoadError


class TestDumps:
    """Test cases for the native text writer."""
    
    def test_sorted_lines(self):
        """Test rendering of simple settings."""
        store = Store.of("b", "2", "a.x", "1")
        assert dumps(store) == 'a.x = "1"\nb = "2"\n'
    
    def test_header(self):
        """Test that header lines become comments."""
        text = dumps(Store.of("a", "1"), header=["Title", ""])
        assert text.startswith("# Title\n#\n\n")
    
    def test_quote_escapes(self):
        """Test escaping of special characters."""
        assert quote('say "hi"\n\t\\') == '"say \\"hi\\"\\n\\t\\\\"'
    
    def test_render_key(self):
        """Test that only non-identifier segments are quoted."""
        assert render_key("app.db.host") == "app.db.host"
        assert render_key("ports.8080.name") == 'ports."8080".name'
        assert render_key("server.display name") == 'server."display name"'
    
    def test_output_parses_back(self):
        """Test that rendered text parses to the same settings."""
        settings = {
            "app.db.url": "jdbc:postgresql://${.host}:${.port}/db",
            "app.motd": "line one\nline \"two\"",
            "ports.8080": "http",
            "weird key.x": "\\path\\",
            "empty": "",
        }
        store = Store.of_all(settings)
        
        assert parse_text(dumps(store)) == settings


class TestDump:
    """Test cases for writing configuration files."""
    
    def test_dump_creates_file(self):
        """Test that dump writes a loadable file."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "nested" / "out.conf"
            dump(Store.of("a.b", "1"), path)
            
            assert path.exists()
            assert Store.load(path).get("a.b") == "1"
            assert path.read_text(encoding='utf-8').startswith("# Generated by hierconf")
    
    def test_dump_unwritable(self):
        """Test that write failures raise ConfigLoadError."""
        with tempfile.TemporaryDirectory() as temp_dir:
            blocker = Path(temp_dir) / "file"
            blocker.write_text("x", encoding='utf-8')
            
            with pytest.raises(ConfigLoadError, match="Cannot write configuration file"):
                dump(Store.of("a", "1"), blocker / "out.conf")


class TestDumpYaml:
    """Test cases for the YAML snapshot."""
    
    def test_yaml_snapshot(self):
        """Test that the snapshot is a flat YAML mapping of strings."""
        store = Store.of("app.port", "8080", "app.name", "demo").compose(Store.of("app.debug", "false"))
        text = dump_yaml(store)
        
        assert text.startswith("# hierconf settings snapshot")
        assert yaml.safe_load(text) == {
            "app.debug": "false",
            "app.name": "demo",
            "app.port": "8080",
        }
    
    def test_empty_store(self):
        """Test the snapshot of an empty store."""
        assert yaml.safe_load(dump_yaml(Store.empty())) == {}
