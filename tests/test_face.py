import unittest

import numpy as np
from scipy.spatial import Delaunay

from fvm_grid.errors import DegenerateFace
from fvm_grid.geometry.face import (
    create_edge_face,
    create_face,
    create_point_face,
    create_quad_face,
    split_quad_metrics,
)
from fvm_grid.geometry.vector import Vector3


class TestEdgeFace(unittest.TestCase):
    """Unit tests for faces of 2D cells."""

    def test_unit_edge(self):
        face = create_edge_face(
            Vector3(0.0, 0.0), Vector3(1.0, 0.0), Vector3(0.0, 1.0)
        )
        self.assertAlmostEqual(face.area, 1.0)
        self.assertTrue(face.normal.isapprox(Vector3(0.0, 1.0, 0.0)))
        self.assertTrue(face.location.isapprox(Vector3(0.5, 0.0, 0.0)))

    def test_orientation(self):
        """The normal follows the reference direction."""
        a, b = Vector3(0.0, 0.0), Vector3(1.0, 0.0)
        down = create_edge_face(a, b, Vector3(0.0, -1.0))
        self.assertTrue(down.normal.isapprox(Vector3(0.0, -1.0, 0.0)))

        # A reference direction perpendicular to the normal keeps its sign
        tie = create_edge_face(a, b, Vector3(1.0, 0.0))
        self.assertTrue(tie.normal.isapprox(Vector3(0.0, 1.0, 0.0)))

    def test_sloped_edge(self):
        face = create_edge_face(
            Vector3(0.0, 0.0), Vector3(3.0, 4.0), Vector3(1.0, 0.0)
        )
        self.assertAlmostEqual(face.area, 5.0)
        self.assertTrue(face.normal.isapprox(Vector3(0.8, -0.6, 0.0)))
        self.assertTrue(face.location.isapprox(Vector3(1.5, 2.0, 0.0)))

    def test_degenerate(self):
        with self.assertRaises(DegenerateFace):
            create_edge_face(Vector3(1.0, 1.0), Vector3(1.0, 1.0), Vector3(0.0, 1.0))

    def test_large_coordinates(self):
        face = create_edge_face(
            Vector3(0.0, 0.0), Vector3(1e200, 0.0), Vector3(0.0, 1.0)
        )
        self.assertAlmostEqual(face.area / 1e200, 1.0)
        self.assertTrue(face.normal.isapprox(Vector3(0.0, 1.0, 0.0)))

    def test_out_of_plane_edge(self):
        """The normal stays a unit vector when the edge leaves the xy plane."""
        face = create_edge_face(
            Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 1.0), Vector3(0.0, 1.0)
        )
        self.assertAlmostEqual(face.normal.norm(), 1.0)
        self.assertTrue(face.normal.isapprox(Vector3(0.0, 1.0, 0.0)))

        # An edge along z has no normal in the xy plane
        with self.assertRaises(DegenerateFace):
            create_edge_face(
                Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0), Vector3(1.0, 0.0)
            )


class TestQuadFace(unittest.TestCase):
    """Unit tests for faces of 3D cells."""

    def test_unit_square(self):
        a, b = Vector3(0.0, 0.0), Vector3(1.0, 0.0)
        c, d = Vector3(1.0, 1.0), Vector3(0.0, 1.0)
        up = create_quad_face(a, b, c, d, Vector3(0.0, 0.0, 1.0))
        self.assertAlmostEqual(up.area, 1.0)
        self.assertTrue(up.normal.isapprox(Vector3(0.0, 0.0, 1.0)))
        self.assertTrue(up.location.isapprox(Vector3(0.5, 0.5, 0.0)))

        down = create_quad_face(a, b, c, d, Vector3(0.2, 0.1, -1.0))
        self.assertTrue(down.normal.isapprox(Vector3(0.0, 0.0, -1.0)))
        self.assertTrue(down.location.isapprox(up.location))

    def test_trapezoid(self):
        """The centroid is the area-weighted mean of the triangle centroids."""
        a, b = Vector3(0.0, 0.0), Vector3(2.0, 0.0)
        c, d = Vector3(1.0, 1.0), Vector3(0.0, 1.0)
        face = create_quad_face(a, b, c, d, Vector3(0.0, 0.0, 1.0))
        self.assertAlmostEqual(face.area, 1.5)
        expected = Vector3(7.0 / 9.0, 4.0 / 9.0, 0.0)
        self.assertTrue(face.location.isapprox(expected, atol=1e-15))

        a1, a2, c1, c2 = split_quad_metrics(a, b, c, d)
        self.assertAlmostEqual(a1, 1.0)
        self.assertAlmostEqual(a2, 0.5)
        self.assertTrue(c1.isapprox(Vector3(2.0 / 3.0, 1.0 / 3.0, 0.0)))
        self.assertTrue(c2.isapprox(Vector3(1.0, 2.0 / 3.0, 0.0)))
        self.assertEqual(face.area, a1 + a2)

    def test_non_planar(self):
        """A warped quad still gets a unit normal and an interior centroid."""
        points = np.array(
            [[0.0, 0.0, 0.0], [1.0, 0.0, 0.3], [1.0, 1.0, 0.0], [0.0, 1.0, 0.4]]
        )
        a, b, c, d = (Vector3.from_array(p) for p in points)
        face = create_quad_face(a, b, c, d, Vector3(0.0, 0.0, 1.0))

        a1, a2, _, _ = split_quad_metrics(a, b, c, d)
        self.assertEqual(face.area, a1 + a2)
        self.assertAlmostEqual(face.normal.norm(), 1.0)
        self.assertGreater(face.normal.z, 0.0)

        hull = Delaunay(points[:, :2])
        self.assertGreaterEqual(hull.find_simplex(face.location.to_array()[:2]), 0)
        self.assertTrue(points[:, 2].min() <= face.location.z <= points[:, 2].max())

    def test_degenerate(self):
        nd = Vector3(0.0, 0.0, 1.0)
        with self.assertRaises(DegenerateFace):
            create_quad_face(
                Vector3(0.0, 0.0),
                Vector3(1.0, 0.0),
                Vector3(2.0, 0.0),
                Vector3(3.0, 0.0),
                nd,
            )
        # Coincident a and b leave a triangle with area but no (b - a) x (d - a)
        with self.assertRaises(DegenerateFace):
            create_quad_face(
                Vector3(0.0, 0.0),
                Vector3(0.0, 0.0),
                Vector3(1.0, 1.0),
                Vector3(0.0, 1.0),
                nd,
            )


class TestPointFace(unittest.TestCase):
    """Unit tests for faces of 1D cells and the generic face factory."""

    def test_point_face(self):
        p = Vector3(1.0, 0.0)
        face = create_point_face(p, Vector3(2.0, 0.0), Vector3(-1.0, 0.0))
        self.assertEqual(face.area, 1.0)
        self.assertTrue(face.normal.isapprox(Vector3(-1.0, 0.0, 0.0)))
        self.assertTrue(face.location.isapprox(p))

        ez = Vector3(0.0, 0.0, 1.0)
        slab = create_point_face(p, ez, ez, area=2.5)
        self.assertEqual(slab.area, 2.5)

        with self.assertRaises(DegenerateFace):
            create_point_face(p, Vector3.zero(), Vector3(1.0, 0.0))

    def test_create_face(self):
        """Test dispatching on the number of vertices."""
        point = create_face(Vector3(2.0, 0.0), nd=Vector3(0.0, 3.0))
        self.assertTrue(point.normal.isapprox(Vector3(0.0, 1.0, 0.0)))

        edge = create_face(
            Vector3(0.0, 0.0), Vector3(1.0, 0.0), nd=Vector3(0.0, 1.0)
        )
        self.assertAlmostEqual(edge.area, 1.0)

        quad = create_face(
            Vector3(0.0, 0.0),
            Vector3(2.0, 0.0),
            Vector3(2.0, 2.0),
            Vector3(0.0, 2.0),
            nd=Vector3(0.0, 0.0, -1.0),
        )
        self.assertAlmostEqual(quad.area, 4.0)
        self.assertTrue(quad.normal.isapprox(Vector3(0.0, 0.0, -1.0)))

        with self.assertRaises(ValueError):
            create_face(
                Vector3(0.0, 0.0),
                Vector3(1.0, 0.0),
                Vector3(0.0, 1.0),
                nd=Vector3(0.0, 0.0, 1.0),
            )

    def test_isapprox(self):
        a, b = Vector3(0.0, 0.0), Vector3(1.0, 0.0)
        face = create_edge_face(a, b, Vector3(0.0, 1.0))
        same = create_edge_face(b, a, Vector3(0.0, 1.0))
        flipped = create_edge_face(a, b, Vector3(0.0, -1.0))
        self.assertTrue(face.isapprox(same))
        self.assertFalse(face.isapprox(flipped))


if __name__ == "__main__":
    unittest.main()
