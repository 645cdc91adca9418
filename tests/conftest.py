# Shared pytest fixtures
from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import pytest

from lotlister.logging.init import LOGGER_NAME, reset_logging

HEADER = "LotNo,ModelNo,Description,ContactPhone,RetailPrice,AskingPrice"

SAMPLE_TEMPLATE = (
    "FOR SALE: {Description}\n"
    "Model: {ModelNo}\n"
    "Lot #: {LotNo}\n"
    "Contact: {ContactPhone}\n"
    "Price: {AskingPrice} (retail {RetailPrice})\n"
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Fresh application logger per test so capsys/caplog see output."""
    reset_logging()
    logger = logging.getLogger(LOGGER_NAME)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "input").mkdir()
        (p / "photos").mkdir()
        monkeypatch.chdir(p)
        for var in ("LOTLISTER_INPUT_DIR", "LOTLISTER_OUTPUT_DIR", "LOTLISTER_PHOTOS_DIR"):
            monkeypatch.delenv(var, raising=False)
        yield p


@pytest.fixture()
def input_dir(temp_workdir: Path) -> Path:
    return temp_workdir / "input"


@pytest.fixture()
def photos_dir(temp_workdir: Path) -> Path:
    return temp_workdir / "photos"


@pytest.fixture()
def sample_csv() -> str:
    return (
        HEADER + "\n"
        "1601,Dexter 417167,Heavy Duty Axle,,450,300\n"
        "1602,Bosch GSR12V,Cordless Drill,555-0100,129,\n"
        ",Orphan,No lot number,555-0100,1,1\n"
        "A/7 b,Makita,Circular Saw,555-0199,99,60\n"
    )


@pytest.fixture()
def write_inventory(input_dir: Path, sample_csv: str) -> Path:
    p = input_dir / "inventory.csv"
    p.write_text(sample_csv, encoding="utf-8")
    return p


@pytest.fixture()
def write_template(input_dir: Path) -> Path:
    p = input_dir / "template.txt"
    p.write_text(SAMPLE_TEMPLATE, encoding="utf-8")
    return p


@pytest.fixture()
def make_photo():
    def _make(directory: Path, name: str, payload: bytes | None = None) -> Path:
        p = directory / name
        p.write_bytes(payload if payload is not None else name.encode("utf-8"))
        return p
    return _make
