"""
Tests for MatrixOptions validation, package errors and logging setup.
"""

import logging
import pickle

import pytest

from SeqDist import (
    DEFAULT_IGNORE,
    DEFAULT_MATRIX_OPTIONS,
    GAP_CHARS,
    GAP_COST,
    LengthMismatch,
    MatrixOptions,
    SeqDistError,
    UnknownSymbol,
)
from SeqDist.logging_setup import configure_logging


class TestMatrixOptions:

    def test_defaults(self):
        assert DEFAULT_MATRIX_OPTIONS.backend == "serial"
        assert DEFAULT_MATRIX_OPTIONS.n_jobs is None
        assert DEFAULT_MATRIX_OPTIONS.chunksize is None

    @pytest.mark.parametrize("backend", ["serial", "thread", "process"])
    def test_valid_backends(self, backend):
        assert MatrixOptions(backend=backend).backend == backend

    def test_invalid_backend(self):
        with pytest.raises(ValueError, match="backend must be one of"):
            MatrixOptions(backend="gpu")

    def test_invalid_chunksize(self):
        with pytest.raises(ValueError):
            MatrixOptions(backend="thread", chunksize=0)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_MATRIX_OPTIONS.backend = "thread"


class TestConstants:

    def test_alphabet_constants(self):
        assert GAP_CHARS == {"-", "."}
        assert DEFAULT_IGNORE == {"N", "-", ".", "?"}
        assert GAP_COST == -1


class TestErrors:

    def test_hierarchy(self):
        assert issubclass(LengthMismatch, SeqDistError)
        assert issubclass(LengthMismatch, ValueError)
        assert issubclass(UnknownSymbol, SeqDistError)
        assert issubclass(UnknownSymbol, KeyError)

    def test_messages(self):
        assert str(LengthMismatch(5, 4)) == "Sequences of different length: 5 != 4"
        assert str(UnknownSymbol("X", "row")) == "Character 'X' not found in cost table row labels"

    @pytest.mark.parametrize("err", [LengthMismatch(3, 7), UnknownSymbol("Z", "column")])
    def test_picklable(self, err):
        clone = pickle.loads(pickle.dumps(err))
        assert type(clone) is type(err)
        assert str(clone) == str(err)


@pytest.fixture
def seqdist_logger():
    logger = logging.getLogger("SeqDist")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestConfigureLogging:

    @pytest.mark.parametrize("verbose,level", [
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (5, logging.DEBUG),
    ])
    def test_levels(self, seqdist_logger, verbose, level):
        handler = configure_logging(verbose)
        assert handler.level == level
        assert seqdist_logger.level == level
        assert handler in seqdist_logger.handlers

    def test_reconfigure_replaces_handler(self, seqdist_logger):
        first = configure_logging(0)
        second = configure_logging(2)
        assert first not in seqdist_logger.handlers
        assert sum(h.get_name() == second.get_name() for h in seqdist_logger.handlers) == 1
