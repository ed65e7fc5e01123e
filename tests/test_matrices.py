"""
test_matrices.py
----------------

Tests for the deficiency matrix catalog (MatrixCatalog, DeficiencyType).

Coverage:
- built-in catalog contents and lookup
- default algorithm selection
- single-matrix types ignore the algorithm argument
- unknown keys
- dict round trip and construction validation
"""

import numpy as np
import pytest

from cvdsim.data.matrices import (
    DEFAULT_ALGORITHM,
    DeficiencyType,
    MatrixCatalog,
    default_catalog,
)
from cvdsim.data.types import IDENTITY, TransformMatrix
from cvdsim.errors import UnknownAlgorithm, UnknownDeficiency

EXPECTED_KEYS = (
    "normal",
    "protanopia",
    "protanomaly",
    "deuteranopia",
    "deuteranomaly",
    "tritanopia",
    "tritanomaly",
    "achromatopsia",
)


class TestDefaultCatalog:
    def test_keys_in_display_order(self, catalog):
        assert catalog.keys() == EXPECTED_KEYS
        assert len(catalog) == len(EXPECTED_KEYS)
        assert [entry.key for entry in catalog] == list(EXPECTED_KEYS)

    def test_algorithm_choices(self, catalog):
        for key in EXPECTED_KEYS:
            if key in ("normal", "achromatopsia"):
                assert catalog.algorithms(key) == ()
            else:
                assert catalog.algorithms(key) == ("brettel", "vienot", "machado")

    def test_normal_is_identity(self, catalog):
        assert catalog.matrix("normal") == IDENTITY

    def test_achromatopsia_rows_are_luma_weights(self, catalog):
        m = catalog.matrix("achromatopsia")
        for row in m.rows:
            np.testing.assert_allclose(row, [0.299, 0.587, 0.114])

    def test_every_matrix_is_3x3(self, catalog):
        for entry in catalog:
            for name in catalog.algorithms(entry.key) or (None,):
                m = catalog.matrix(entry.key, name)
                assert isinstance(m, TransformMatrix)
                assert np.asarray(m.as_array()).shape == (3, 3)

    def test_display_metadata(self, catalog):
        entry = catalog["deuteranopia"]
        assert entry.name == "Deuteranopia"
        assert entry.label == "Green-Blind"

    def test_each_call_builds_a_fresh_catalog(self):
        assert default_catalog() is not default_catalog()
        assert default_catalog().to_dict() == default_catalog().to_dict()


class TestLookup:
    def test_default_algorithm_is_machado(self, catalog):
        assert DEFAULT_ALGORITHM == "machado"
        assert catalog.matrix("tritanopia") == catalog.matrix("tritanopia", "machado")

    def test_named_algorithms_differ(self, catalog):
        assert catalog.matrix("protanopia", "brettel") != catalog.matrix(
            "protanopia", "vienot"
        )

    def test_custom_default_algorithm(self):
        catalog = MatrixCatalog.from_dict(
            default_catalog().to_dict(), default_algorithm="vienot"
        )
        assert catalog.matrix("protanopia") == catalog.matrix("protanopia", "vienot")

    def test_single_matrix_type_ignores_algorithm(self, catalog):
        m = catalog.matrix("achromatopsia")
        assert catalog.matrix("achromatopsia", "brettel") == m
        assert catalog.matrix("achromatopsia", "nonsense") == m

    def test_contains(self, catalog):
        assert "protanopia" in catalog
        assert "xanthopsia" not in catalog

    def test_unknown_deficiency(self, catalog):
        with pytest.raises(UnknownDeficiency):
            catalog.matrix("xanthopsia")
        with pytest.raises(KeyError):
            _ = catalog["xanthopsia"]

    def test_unknown_algorithm(self, catalog):
        with pytest.raises(UnknownAlgorithm, match="protanopia"):
            catalog.matrix("protanopia", "nonsense")

    def test_entries_are_read_only(self, catalog):
        entry = catalog["protanopia"]
        with pytest.raises(TypeError):
            entry.algorithms["brettel"] = IDENTITY
        with pytest.raises(AttributeError):
            entry.name = "Other"


class TestConstruction:
    def test_dict_round_trip(self, catalog):
        rebuilt = MatrixCatalog.from_dict(catalog.to_dict())
        assert rebuilt.keys() == catalog.keys()
        for entry in catalog:
            for name in catalog.algorithms(entry.key) or (None,):
                assert rebuilt.matrix(entry.key, name) == catalog.matrix(entry.key, name)

    def test_from_dict_defaults_name_and_label(self):
        catalog = MatrixCatalog.from_dict({"grey": {"matrix": np.eye(3)}})
        assert catalog["grey"].name == "Grey"
        assert catalog["grey"].label == ""
        assert catalog.matrix("grey") == IDENTITY

    def test_duplicate_key_rejected(self):
        entry = DeficiencyType("normal", "Normal", "", matrix=IDENTITY)
        with pytest.raises(ValueError, match="duplicate"):
            MatrixCatalog([entry, entry])

    def test_matrix_and_algorithms_are_exclusive(self):
        with pytest.raises(ValueError):
            DeficiencyType("x", "X", "")
        with pytest.raises(ValueError):
            DeficiencyType("x", "X", "", matrix=IDENTITY, algorithms={"a": IDENTITY})

    def test_bad_matrix_in_dict(self):
        with pytest.raises(ValueError):
            MatrixCatalog.from_dict({"x": {"algorithms": {"a": [[1, 0], [0, 1]]}}})

    def test_has_algorithms(self, catalog):
        assert catalog["protanomaly"].has_algorithms
        assert not catalog["normal"].has_algorithms
