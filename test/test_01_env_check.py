import sys
import importlib

import pytest

# 필수 라이브러리 목록
required_libraries = ["cv2", "numpy", "pandas", "tqdm"]


@pytest.mark.parametrize("lib", required_libraries)
def test_imports(lib):
    assert importlib.import_module(lib) is not None


def test_python_version():
    assert sys.version_info >= (3, 8)


def test_package_exports():
    import pet_pad as pp

    for name in ("RegionSampler", "ImageDecoder", "HistoryStore", "Repository", "PetPadMonitor"):
        assert hasattr(pp, name)
