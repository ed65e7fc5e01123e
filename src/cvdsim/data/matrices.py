"""
matrices.py
-----------

Catalog of color vision deficiency transformation matrices.

defines:
- DeficiencyType: one entry of the catalog (a single matrix, or a choice of
  named algorithms each mapping to a matrix)
- MatrixCatalog: immutable mapping from deficiency key to DeficiencyType
- default_catalog(): the built-in dataset

Notes
-----
- The catalog is configuration, not global state. Build it once (e.g. at
  application startup) and pass it to whatever needs a matrix lookup;
  cvdsim.transform never reads it.
- Matrix values come from the Brettel, Viénot and Machado simulation
  literature and are taken as given. "normal" and "achromatopsia" have a
  single matrix and no algorithm choice.

Examples
--------
>>> from cvdsim.data.matrices import default_catalog
>>> catalog = default_catalog()
>>> catalog.algorithms("protanopia")
('brettel', 'vienot', 'machado')
>>> catalog.matrix("protanopia", "vienot")[0][0]
0.152286
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from cvdsim.data.types import IDENTITY, TransformMatrix, as_transform_matrix
from cvdsim.errors import UnknownAlgorithm, UnknownDeficiency

DEFAULT_ALGORITHM = "machado"


@dataclass(frozen=True)
class DeficiencyType:
    """
    A deficiency type and its matrix (or matrices).

    Attributes
    ----------
    key : str
        Identifier, e.g. "protanopia".
    name : str
        Display name, e.g. "Protanopia".
    label : str
        Short description, e.g. "Red-Blind".
    matrix : TransformMatrix | None
        The only matrix, for types without an algorithm choice.
    algorithms : Mapping[str, TransformMatrix]
        Algorithm name -> matrix, in display order. Empty when ``matrix``
        is set.
    """

    key: str
    name: str
    label: str
    matrix: TransformMatrix | None = None
    algorithms: Mapping[str, TransformMatrix] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self):
        """Validate that exactly one of matrix / algorithms is given."""
        if (self.matrix is None) == (not self.algorithms):
            raise ValueError(
                f"{self.key!r}: provide exactly one of matrix or algorithms"
            )
        if self.matrix is not None:
            object.__setattr__(self, "matrix", as_transform_matrix(self.matrix))
        frozen = {name: as_transform_matrix(m) for name, m in self.algorithms.items()}
        object.__setattr__(self, "algorithms", MappingProxyType(frozen))

    @property
    def has_algorithms(self) -> bool:
        return self.matrix is None

    def resolve(
        self, algorithm: str | None = None, *, default: str = DEFAULT_ALGORITHM
    ) -> TransformMatrix:
        """
        Return the matrix for ``algorithm``.

        Single-matrix types ignore ``algorithm``. For the others, None
        selects ``default``.
        """
        if self.matrix is not None:
            return self.matrix
        name = default if algorithm is None else algorithm
        try:
            return self.algorithms[name]
        except KeyError:
            raise UnknownAlgorithm(
                f"{self.key!r} has no algorithm {name!r}; "
                f"choose from {tuple(self.algorithms)}"
            ) from None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "label": self.label}
        if self.matrix is not None:
            out["matrix"] = self.matrix.to_list()
        else:
            out["algorithms"] = {k: m.to_list() for k, m in self.algorithms.items()}
        return out


class MatrixCatalog:
    """
    Read-only lookup from (deficiency type, algorithm) to TransformMatrix.

    Parameters
    ----------
    entries : iterable of DeficiencyType
        Entries in display order. Keys must be unique.
    default_algorithm : str, default="machado"
        Algorithm used when a lookup does not name one.
    """

    def __init__(self, entries, *, default_algorithm: str = DEFAULT_ALGORITHM):
        table: dict[str, DeficiencyType] = {}
        for entry in entries:
            if entry.key in table:
                raise ValueError(f"duplicate deficiency type {entry.key!r}")
            table[entry.key] = entry
        self._entries = MappingProxyType(table)
        self.default_algorithm = default_algorithm

    # ------------------------------------------------------------------
    # LOOKUP
    # ------------------------------------------------------------------
    def __getitem__(self, key: str) -> DeficiencyType:
        try:
            return self._entries[key]
        except KeyError:
            raise UnknownDeficiency(
                f"unknown deficiency type {key!r}; choose from {tuple(self._entries)}"
            ) from None

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[DeficiencyType]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def algorithms(self, deficiency: str) -> tuple[str, ...]:
        """Algorithm names for ``deficiency`` (empty for single-matrix types)."""
        return tuple(self[deficiency].algorithms)

    def matrix(self, deficiency: str, algorithm: str | None = None) -> TransformMatrix:
        """
        Look up the matrix for a deficiency type and algorithm.

        Parameters
        ----------
        deficiency : str
            Deficiency key, e.g. "deuteranopia".
        algorithm : str, optional
            Algorithm name. Ignored for single-matrix types; defaults to
            ``default_algorithm`` otherwise.

        Raises
        ------
        UnknownDeficiency, UnknownAlgorithm
        """
        return self[deficiency].resolve(algorithm, default=self.default_algorithm)

    # ------------------------------------------------------------------
    # SERIALIZATION
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(
        cls, data: Mapping[str, Mapping[str, Any]], **kwargs
    ) -> MatrixCatalog:
        """
        Build a catalog from plain data.

        Each value holds "name", "label" and either "matrix" (3x3 nested
        lists) or "algorithms" (name -> 3x3 nested lists).
        """
        entries = []
        for key, fields in data.items():
            entries.append(
                DeficiencyType(
                    key=key,
                    name=fields.get("name", key.title()),
                    label=fields.get("label", ""),
                    matrix=fields.get("matrix"),
                    algorithms=fields.get("algorithms") or {},
                )
            )
        return cls(entries, **kwargs)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {entry.key: entry.to_dict() for entry in self}

    def __repr__(self) -> str:
        return f"MatrixCatalog({list(self._entries)!r})"


_DEFAULT_TABLE: dict[str, dict[str, Any]] = {
    "normal": {
        "name": "Normal",
        "label": "Normal Vision",
        "matrix": IDENTITY.to_list(),
    },
    "protanopia": {
        "name": "Protanopia",
        "label": "Red-Blind",
        "algorithms": {
            "brettel": [
                [0.0, 1.05118294, -0.05116099],
                [0.0, 1.0, 0.0],
                [0.0, 0.0, 1.0],
            ],
            "vienot": [
                [0.152286, 1.052583, -0.204868],
                [0.114503, 0.786281, 0.099216],
                [-0.003882, -0.048116, 1.051998],
            ],
            "machado": [
                [0.567, 0.433, 0.0],
                [0.558, 0.442, 0.0],
                [0.0, 0.242, 0.758],
            ],
        },
    },
    "protanomaly": {
        "name": "Protanomaly",
        "label": "Red-Weak",
        "algorithms": {
            "brettel": [[0.817, 0.183, 0.0], [0.333, 0.667, 0.0], [0.0, 0.125, 0.875]],
            "vienot": [[0.815, 0.185, 0.0], [0.318, 0.682, 0.0], [0.0, 0.110, 0.890]],
            "machado": [[0.817, 0.183, 0.0], [0.333, 0.667, 0.0], [0.0, 0.125, 0.875]],
        },
    },
    "deuteranopia": {
        "name": "Deuteranopia",
        "label": "Green-Blind",
        "algorithms": {
            "brettel": [
                [1.0, 0.0, 0.0],
                [0.9513092, 0.0, 0.04866992],
                [0.0, 0.0, 1.0],
            ],
            "vienot": [
                [0.367322, 0.860646, -0.227968],
                [0.280085, 0.672501, 0.047413],
                [-0.011820, 0.042940, 0.968881],
            ],
            "machado": [
                [1.0, 0.0, 0.0],
                [0.9513092, 0.0, 0.04866992],
                [0.0, 0.0, 1.0],
            ],
        },
    },
    "deuteranomaly": {
        "name": "Deuteranomaly",
        "label": "Green-Weak",
        "algorithms": {
            "brettel": [[0.8, 0.2, 0.0], [0.258, 0.742, 0.0], [0.0, 0.142, 0.858]],
            "vienot": [[0.8, 0.2, 0.0], [0.255, 0.745, 0.0], [0.0, 0.130, 0.870]],
            "machado": [[0.8, 0.2, 0.0], [0.258, 0.742, 0.0], [0.0, 0.142, 0.858]],
        },
    },
    "tritanopia": {
        "name": "Tritanopia",
        "label": "Blue-Blind",
        "algorithms": {
            "brettel": [
                [1.0, 0.0, 0.0],
                [0.0, 1.0, 0.0],
                [-0.86744736, 1.86727089, 0.0],
            ],
            "vienot": [
                [1.255528, -0.076749, -0.178779],
                [-0.078411, 0.930809, 0.147602],
                [0.004733, 0.691367, 0.303900],
            ],
            "machado": [
                [1.0, 0.0, 0.0],
                [0.0, 1.0, 0.0],
                [-0.86744736, 1.86727089, 0.0],
            ],
        },
    },
    "tritanomaly": {
        "name": "Tritanomaly",
        "label": "Blue-Weak",
        "algorithms": {
            "brettel": [[0.967, 0.033, 0.0], [0.0, 0.733, 0.267], [0.0, 0.183, 0.817]],
            "vienot": [[0.97, 0.03, 0.0], [0.0, 0.72, 0.28], [0.0, 0.18, 0.82]],
            "machado": [[0.967, 0.033, 0.0], [0.0, 0.733, 0.267], [0.0, 0.183, 0.817]],
        },
    },
    "achromatopsia": {
        "name": "Achromatopsia",
        "label": "Monochrome",
        "matrix": [
            [0.299, 0.587, 0.114],
            [0.299, 0.587, 0.114],
            [0.299, 0.587, 0.114],
        ],
    },
}


def default_catalog() -> MatrixCatalog:
    """Build the built-in catalog of deficiency matrices."""
    return MatrixCatalog.from_dict(_DEFAULT_TABLE)
