import numpy as np
import pytest

from vasetopia_core.mesh import Mesh


def _quad():
    return Mesh(
        positions=[(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)],
        normals=[(0, 0, 1)] * 4,
        uvs=[(0, 0), (1, 0), (1, 1), (0, 1)],
        indices=[0, 1, 2, 0, 2, 3],
    )


def test_empty_mesh():
    mesh = Mesh.empty()
    assert mesh.is_empty
    assert mesh.vertex_count == 0
    assert mesh.index_count == 0
    assert mesh.bounds() is None


def test_dtypes_and_counts():
    mesh = _quad()
    assert mesh.positions.dtype == np.float32
    assert mesh.normals.dtype == np.float32
    assert mesh.uvs.dtype == np.float32
    assert mesh.indices.dtype == np.uint32
    assert mesh.vertex_count == 4
    assert mesh.triangle_count == 2
    assert mesh.triangles.tolist() == [[0, 1, 2], [0, 2, 3]]


def test_arrays_are_read_only():
    mesh = _quad()
    with pytest.raises(ValueError):
        mesh.positions[0, 0] = 5.0
    with pytest.raises(ValueError):
        mesh.indices[0] = 3


def test_interleaved_layout():
    rows = _quad().interleaved()
    assert rows.shape == (4, 8)
    assert rows.dtype == np.float32
    assert rows[2].tolist() == [1, 1, 0, 0, 0, 1, 1, 1]


def test_out_of_range_index_rejected():
    with pytest.raises(ValueError, match="out of range"):
        Mesh(positions=[(0, 0, 0)] * 3, normals=[(0, 0, 1)] * 3, uvs=[(0, 0)] * 3, indices=[0, 1, 3])


def test_partial_triangle_rejected():
    with pytest.raises(ValueError, match="multiple of 3"):
        Mesh(positions=[(0, 0, 0)] * 3, normals=[(0, 0, 1)] * 3, uvs=[(0, 0)] * 3, indices=[0, 1])


def test_attribute_mismatch_rejected():
    with pytest.raises(ValueError, match="mismatch"):
        Mesh(positions=[(0, 0, 0)] * 3, normals=[(0, 0, 1)] * 2, uvs=[(0, 0)] * 3, indices=[0, 1, 2])


def test_bounds():
    lo, hi = _quad().bounds()
    assert lo.tolist() == [0, 0, 0]
    assert hi.tolist() == [1, 1, 0]
