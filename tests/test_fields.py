import unittest

import numpy as np

from fvm_grid.errors import FieldShapeMismatch
from fvm_grid.structmesh.fields import (
    BorderValue,
    BoundaryCondition,
    CellValue,
    CellVector,
    FaceValue,
    FaceVector,
)
from fvm_grid.structmesh.mesh_structure import MeshStructure


class TestCellFields(unittest.TestCase):
    """Unit tests for values stored per cell."""

    @classmethod
    def setUpClass(cls):
        cls.mesh = MeshStructure.create_uniform(2, 3)

    def test_cell_value(self):
        field = CellValue.zeros(self.mesh)
        self.assertEqual(field.value.shape, (2, 3, 1))
        self.assertIs(field.domain, self.mesh)

        field = CellValue(self.mesh, np.arange(6.0).reshape(2, 3, 1))
        self.assertEqual(field.value[1, 2, 0], 5.0)

        with self.assertRaises(FieldShapeMismatch):
            CellValue(self.mesh, np.zeros((2, 3)))
        with self.assertRaises(ValueError):
            CellValue(self.mesh, np.zeros((3, 2, 1)))

    def test_cell_vector(self):
        field = CellVector(self.mesh, self.mesh.cells.centroids)
        self.assertEqual(field.vector.shape, (2, 3, 1, 3))
        with self.assertRaises(FieldShapeMismatch):
            CellVector(self.mesh, np.zeros((2, 3, 1)))


class TestFaceFields(unittest.TestCase):
    """Unit tests for values stored per face."""

    @classmethod
    def setUpClass(cls):
        cls.mesh = MeshStructure.create_uniform(2, 3)

    def test_face_value(self):
        field = FaceValue.zeros(self.mesh)
        self.assertEqual(field.ivalue.shape, (3, 3, 1))
        self.assertEqual(field.jvalue.shape, (2, 4, 1))
        self.assertEqual(field.kvalue.shape, (2, 3, 2))

        with self.assertRaises(FieldShapeMismatch):
            FaceValue(
                self.mesh,
                np.zeros((3, 3, 1)),
                np.zeros((2, 3, 1)),
                np.zeros((2, 3, 2)),
            )

    def test_face_vector(self):
        faces = self.mesh.faces
        field = FaceVector(
            self.mesh, faces.ifaces.normals, faces.jfaces.normals, faces.kfaces.normals
        )
        self.assertEqual(field.jvalue.shape, (2, 4, 1, 3))
        with self.assertRaises(FieldShapeMismatch):
            FaceVector(
                self.mesh, faces.ifaces.areas, faces.jfaces.areas, faces.kfaces.areas
            )


class TestBoundaryCondition(unittest.TestCase):
    """Unit tests for border values and boundary conditions."""

    @classmethod
    def setUpClass(cls):
        cls.mesh = MeshStructure.create_uniform(2, 3)

    def test_border_value(self):
        border = BorderValue.uniform((3, 1), 1.5)
        self.assertEqual(border.shape, (3, 1))
        self.assertFalse(np.any(border.isflux))
        self.assertTrue(np.allclose(border.value, 1.5))

        border = BorderValue([1, 0, 1], [0.0, 2.0, 0.0])
        self.assertEqual(border.isflux.dtype, bool)
        self.assertTrue(border.isflux[0])

        with self.assertRaises(FieldShapeMismatch):
            BorderValue(np.zeros(2, dtype=bool), np.zeros(3))

    def test_uniform(self):
        bc = BoundaryCondition.uniform(self.mesh, value=0.0, isflux=True)
        self.assertEqual(bc.sides(), ("left", "right", "bottom", "top", "back", "front"))
        for name in bc.sides():
            border = bc.side(name)
            self.assertEqual(border.shape, self.mesh.boundary_shape(name))
            self.assertTrue(np.all(border.isflux))
        self.assertEqual(bc.side("top").shape, (2, 1))
        self.assertEqual(bc.side("left").shape, (3, 1))
        self.assertEqual(bc.side("back").shape, (2, 3))

        with self.assertRaises(KeyError):
            bc.side("north")

    def test_shape_mismatch(self):
        """Every side is checked against the boundary face layout."""
        borders = {
            name: BorderValue.uniform(self.mesh.boundary_shape(name), 0.0)
            for name in ("left", "right", "bottom", "top", "back", "front")
        }
        BoundaryCondition(self.mesh, **borders)

        wrong = dict(borders, top=BorderValue.uniform((3, 1), 0.0))
        with self.assertRaises(FieldShapeMismatch):
            BoundaryCondition(self.mesh, **wrong)

        wrong = dict(borders, front=np.zeros((2, 3)))
        with self.assertRaises(TypeError):
            BoundaryCondition(self.mesh, **wrong)


if __name__ == "__main__":
    unittest.main()
