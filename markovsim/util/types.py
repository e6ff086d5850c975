from typing import Tuple, Optional, Sequence

import numpy as np
from scipy.sparse import issparse

from .exceptions import DimensionMismatchError


def ensure_array(arr, shape: Optional[Tuple] = None, ndim: Optional[int] = None,
                 dtype=None, size=None) -> np.ndarray:
    r""" Converts the input into a dense ndarray and checks shape, dimension, size and dtype.

    Sparse scipy matrices are densified.

    Parameters
    ----------
    arr : array_like
        The input.
    shape : tuple, optional, default=None
        Required shape.
    ndim : int, optional, default=None
        Required number of dimensions.
    dtype : dtype, optional, default=None
        Required dtype (checked with `np.issubdtype`).
    size : int, optional, default=None
        Required number of elements.

    Returns
    -------
    arr : ndarray
        The converted array.
    """
    if issparse(arr):
        arr = arr.toarray()
    elif not isinstance(arr, np.ndarray):
        arr = np.asanyarray(arr)

    if shape is not None and arr.shape != shape:
        raise ValueError(f"Shape of provided array was {arr.shape} != {shape}")
    if ndim is not None and arr.ndim != ndim:
        raise ValueError(f"ndim of provided array was {arr.ndim} != {ndim}")
    if size is not None and np.size(arr) != size:
        raise ValueError(f"size of provided array was {np.size(arr)} != {size}")
    if dtype is not None and not np.issubdtype(arr.dtype, dtype):
        raise ValueError(f"Array got incompatible dtype: {arr.dtype} is not a subtype of {dtype}.")
    return arr


def ensure_number_array(arr, shape: Tuple = None, ndim: int = None, size=None) -> np.ndarray:
    return ensure_array(arr, shape=shape, ndim=ndim, size=size, dtype=np.number)


def ensure_floating_array(arr, shape: Tuple = None, ndim: int = None, size=None) -> np.ndarray:
    r""" Like :meth:`ensure_number_array` but the result is always a float64 array. Integer input
    (e.g. a list of zeros and ones) is converted. """
    arr = ensure_number_array(arr, shape=shape, ndim=ndim, size=size)
    return arr.astype(np.float64, copy=False)


def ensure_transition_matrix_shape(P) -> np.ndarray:
    r""" Ensures that `P` is a square float matrix with at least one state.

    Raises
    ------
    DimensionMismatchError
        If `P` is not square or empty.
    """
    P = ensure_floating_array(P, ndim=2)
    if P.shape[0] != P.shape[1] or P.shape[0] < 1:
        raise DimensionMismatchError(f"Transition matrix must be square with at least one state, "
                                     f"but had shape {P.shape}.")
    return P


def ensure_vector_for(p, P: np.ndarray) -> np.ndarray:
    r""" Ensures that `p` is a float vector with one entry per state of `P`.

    Raises
    ------
    DimensionMismatchError
        If the lengths disagree.
    """
    p = ensure_floating_array(p, ndim=1)
    if p.shape[0] != P.shape[0]:
        raise DimensionMismatchError(f"Vector of length {p.shape[0]} does not match "
                                     f"transition matrix with {P.shape[0]} states.")
    return p


def ensure_labels(labels: Sequence[str], n_states: Optional[int] = None) -> Tuple[str, ...]:
    r""" Converts labels to a tuple of strings, optionally checking their count against `n_states`. """
    labels = tuple(str(label) for label in labels)
    if n_states is not None and len(labels) != n_states:
        raise DimensionMismatchError(f"Got {len(labels)} labels for {n_states} states.")
    return labels
