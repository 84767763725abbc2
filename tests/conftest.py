import os
import sys
from pathlib import Path

import pytest

# Ensure varion can be imported without installing
sys.path.append(os.getcwd())


@pytest.fixture
def parser():
    """Fresh ScriptParser for each test."""
    from varion.parser import ScriptParser
    return ScriptParser()


@pytest.fixture
def examples_dir():
    """Directory holding the sample scripts."""
    return Path(__file__).resolve().parent.parent / "examples"
