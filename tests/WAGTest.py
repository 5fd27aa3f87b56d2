import logging
import unittest

import numpy as np

from wagmatrix.logger import set_up_wagmatrix_logger
from wagmatrix.models.WAGModel import WAG_RAW_RATE_MATRIX, WAG_STATES, WAGModel, WAG, get_wag_model

# Whelan and Goldman 2001, reordered alphabetically by one-letter code
WAG_PUBLISHED_FREQUENCIES = {'A': 0.0866279, 'R': 0.043972, 'N': 0.0390894, 'D': 0.0570451, 'C': 0.0193078,
                             'Q': 0.0367281, 'E': 0.0580589, 'G': 0.0832518, 'H': 0.0244313, 'I': 0.048466,
                             'L': 0.086209, 'K': 0.0620286, 'M': 0.0195027, 'F': 0.0384319, 'P': 0.0457631,
                             'S': 0.0695179, 'T': 0.0610127, 'W': 0.0143859, 'Y': 0.0352742, 'V': 0.0708956}

model = WAGModel()


class WAGTest(unittest.TestCase):

    def test_states(self):
        self.assertEqual(20, len(WAG_STATES), msg='WAG should have 20 states')
        self.assertTrue(np.all(np.sort(WAG_STATES) == WAG_STATES), msg='WAG states were supposed to be sorted')
        self.assertEqual((20, 20), WAG_RAW_RATE_MATRIX.shape, msg='WAG raw rate matrix should be 20x20')

    def test_frequencies_sum_to_one(self):
        self.assertAlmostEqual(1, model.frequencies.sum(), delta=1e-9,
                               msg='WAG frequencies were supposed to sum to 1')

    def test_frequencies_are_non_negative(self):
        self.assertTrue(np.all(model.frequencies >= 0), msg='WAG frequencies were supposed to be non-negative')

    def test_frequencies_are_published_ones(self):
        expected = np.array([WAG_PUBLISHED_FREQUENCIES[state] for state in WAG_STATES])
        self.assertTrue(np.allclose(expected, model.frequencies, atol=1e-4),
                        msg='WAG frequencies {} differ from the published ones {}'.format(model.frequencies, expected))

    def test_frequencies_are_stationary(self):
        self.assertTrue(np.allclose(model.frequencies.dot(model.rate_matrix), 0, atol=1e-9),
                        msg='pi^T Q was supposed to be 0')

    def test_rows_sum_to_zero(self):
        self.assertTrue(np.allclose(model.rate_matrix.sum(axis=1), 0, atol=1e-9),
                        msg='WAG generator rows were supposed to sum to 0')

    def test_off_diagonal_non_negative(self):
        off_diagonal = model.rate_matrix[~np.eye(20, dtype=bool)]
        self.assertTrue(np.all(off_diagonal >= 0), msg='WAG off-diagonal rates were supposed to be non-negative')

    def test_normalised(self):
        self.assertAlmostEqual(1, -model.frequencies.dot(model.rate_matrix.diagonal()), delta=1e-9,
                               msg='WAG expected substitution rate at stationarity was supposed to be 1')

    def test_reversible(self):
        flux = model.frequencies[:, np.newaxis] * model.rate_matrix
        self.assertTrue(np.allclose(flux, flux.T, atol=1e-7), msg='WAG was supposed to be time-reversible')

    def test_eigendecomposition(self):
        Q = model.V.dot(np.diag(model.sigma)).dot(model.Vi)
        self.assertTrue(np.allclose(Q, model.rate_matrix, rtol=0, atol=1e-6),
                        msg='V diag(sigma) V^-1 was supposed to reconstruct Q')

    def test_eigenvectors_invertible(self):
        self.assertTrue(np.allclose(model.V.dot(model.Vi), np.eye(20)),
                        msg='Vi was supposed to be the inverse of V')

    def test_one_zero_eigenvalue(self):
        self.assertEqual(1, np.count_nonzero(np.abs(model.sigma) < 1e-8),
                         msg='WAG generator was supposed to have exactly one zero eigenvalue')
        self.assertTrue(np.all(model.sigma < 1e-8), msg='WAG generator eigenvalues were supposed to be non-positive')

    def test_aliases(self):
        self.assertIs(model.Q, model.rate_matrix)
        self.assertIs(model.freqs, model.frequencies)
        self.assertIs(model.get_frequencies(), model.frequencies)
        self.assertTrue(np.all(model.get_states() == WAG_STATES))
        self.assertEqual(WAG, model.name)

    def test_state_index(self):
        self.assertEqual(0, model.get_state_index('A'))
        self.assertEqual(19, model.get_state_index('Y'))
        self.assertRaises(ValueError, model.get_state_index, 'X')

    def test_outputs_are_read_only(self):
        for array in (model.frequencies, model.rate_matrix, model.sigma, model.V, model.Vi, WAG_RAW_RATE_MATRIX):
            with self.assertRaises(ValueError):
                array[0] = 0

    def test_preset_parameters_cannot_be_changed(self):
        with self.assertRaises(NotImplementedError):
            model.frequencies = np.ones(20) / 20
        with self.assertRaises(NotImplementedError):
            model.rate_matrix = np.zeros((20, 20))

    def test_deterministic(self):
        other = WAGModel()
        self.assertTrue(np.all(other.rate_matrix == model.rate_matrix), msg='WAG construction should be deterministic')
        self.assertTrue(np.all(other.frequencies == model.frequencies), msg='WAG construction should be deterministic')

    def test_shared_model(self):
        self.assertIs(get_wag_model(), get_wag_model(), msg='The WAG model should be built once and shared')

    def test_str(self):
        description = str(model)
        self.assertTrue(description.startswith('Model WAG'))
        for state in WAG_STATES:
            self.assertIn('\t\t{}:\t'.format(state), description)

    def test_construction_is_logged(self):
        set_up_wagmatrix_logger(True)
        with self.assertLogs('wagmatrix', level=logging.DEBUG) as cm:
            WAGModel()
        self.assertTrue(any('zero eigenvalue' in _ for _ in cm.output))
        self.assertTrue(any('Initialised Model WAG' in _ for _ in cm.output))
        set_up_wagmatrix_logger(False)
