import unittest

import numpy as np

from wagmatrix.models.EmpiricalModel import EmpiricalModel
from wagmatrix.models.WAGModel import WAG_STATES, WAG_RAW_RATE_MATRIX
from wagmatrix.models.generator import InvalidMatrixError, get_stationary_frequencies, get_diagonalisation, \
    get_normalised_generator


class InvalidMatrixTest(unittest.TestCase):

    def test_zero_matrix(self):
        self.assertRaises(InvalidMatrixError, EmpiricalModel, states=WAG_STATES, rate_matrix=np.zeros((20, 20)))

    def test_positive_eigenvalue(self):
        self.assertRaises(InvalidMatrixError, EmpiricalModel, states=np.array(['a', 'b']),
                          rate_matrix=np.ones((2, 2)))

    def test_unsummed_diagonal(self):
        # the diagonal is not rebuilt before the stationary distribution is extracted
        rate_matrix = np.array(WAG_RAW_RATE_MATRIX)
        np.fill_diagonal(rate_matrix, 0)
        self.assertRaises(InvalidMatrixError, EmpiricalModel, states=WAG_STATES, rate_matrix=rate_matrix)

    def test_reducible_matrix(self):
        block = np.array([[-1, 1], [1, -1]], dtype=np.float64)
        rate_matrix = np.zeros((4, 4))
        rate_matrix[:2, :2] = block
        rate_matrix[2:, 2:] = block
        self.assertRaises(InvalidMatrixError, get_stationary_frequencies, rate_matrix)

    def test_negative_stationary_distribution(self):
        rate_matrix = np.array([[-1, -1], [-2, -2]], dtype=np.float64)
        self.assertRaises(InvalidMatrixError, get_stationary_frequencies, rate_matrix)

    def test_zero_rate(self):
        self.assertRaises(InvalidMatrixError, get_normalised_generator, np.array([1., 0.]), np.eye(2))

    def test_singular_eigenvectors(self):
        # a Jordan block is not diagonalisable
        self.assertRaises(InvalidMatrixError, get_diagonalisation, np.array([[0., 1.], [0., 0.]]))

    def test_invalid_error_is_value_error(self):
        self.assertTrue(issubclass(InvalidMatrixError, ValueError))

    def test_non_square_matrix(self):
        self.assertRaises(ValueError, EmpiricalModel, states=WAG_STATES, rate_matrix=np.zeros((20, 19)))

    def test_state_number_mismatch(self):
        self.assertRaises(ValueError, EmpiricalModel, states=WAG_STATES[:-1], rate_matrix=WAG_RAW_RATE_MATRIX)

    def test_non_finite_matrix(self):
        rate_matrix = np.array(WAG_RAW_RATE_MATRIX)
        rate_matrix[0, 1] = np.nan
        self.assertRaises(ValueError, EmpiricalModel, states=WAG_STATES, rate_matrix=rate_matrix)
