"""
Pytest configuration and shared fixtures for the opcode coverage tools
"""
import pytest
import sys
import os

# Add src to Python path so we can import opcov modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


@pytest.fixture
def write_trace(tmp_path):
    """Write raw trace bytes to a file and return its path."""
    def _write(data, name='log.txt'):
        path = tmp_path / name
        path.write_bytes(bytes(data))
        return path
    return _write


@pytest.fixture
def write_report(tmp_path):
    """Write a line-based report (newline terminated) and return its path."""
    def _write(name, lines):
        path = tmp_path / name
        path.write_text(''.join(line + '\n' for line in lines), encoding='utf-8')
        return path
    return _write
