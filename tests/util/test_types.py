import numpy as np
import pytest
from numpy.testing import assert_, assert_equal, assert_raises
from scipy.sparse import csr_matrix

from markovsim.util.exceptions import DimensionMismatchError, InvalidMatrixError
from markovsim.util.types import ensure_array, ensure_floating_array, ensure_transition_matrix_shape, \
    ensure_vector_for, ensure_labels


def test_ensure_array_checks():
    arr = ensure_array([[1, 2], [3, 4]], shape=(2, 2), ndim=2, size=4, dtype=np.integer)
    assert_equal(arr.shape, (2, 2))
    with assert_raises(ValueError):
        ensure_array([1, 2], shape=(3,))
    with assert_raises(ValueError):
        ensure_array([1, 2], ndim=2)
    with assert_raises(ValueError):
        ensure_array([1, 2], size=3)
    with assert_raises(ValueError):
        ensure_array([1., 2.], dtype=np.integer)


def test_ensure_array_sparse():
    arr = ensure_array(csr_matrix(np.eye(3)))
    assert_(isinstance(arr, np.ndarray))
    assert_equal(arr, np.eye(3))


def test_ensure_floating_array():
    arr = ensure_floating_array([1, 0])
    assert_equal(arr.dtype, np.float64)
    with assert_raises(ValueError):
        ensure_floating_array(["a", "b"])


@pytest.mark.parametrize("P", [np.ones((2, 3)), np.zeros((0, 0))], ids=["non-square", "empty"])
def test_transition_matrix_shape(P):
    with assert_raises(DimensionMismatchError):
        ensure_transition_matrix_shape(P)


def test_vector_for():
    P = np.eye(3)
    assert_equal(ensure_vector_for([1, 0, 0], P), [1., 0., 0.])
    with assert_raises(DimensionMismatchError):
        ensure_vector_for([1, 0], P)


def test_labels():
    assert_equal(ensure_labels(["a", 1]), ("a", "1"))
    with assert_raises(DimensionMismatchError):
        ensure_labels(["a"], n_states=2)


def test_exceptions():
    e = InvalidMatrixError("bad", row=3)
    assert_equal(e.row, 3)
    assert_("row 3" in str(e))
    assert_(isinstance(e, ValueError))
    assert_(InvalidMatrixError("bad").row is None)
    assert_(issubclass(DimensionMismatchError, ValueError))
