import logging

import numpy as np

from wagmatrix.models import Model, MODEL
from wagmatrix.models.generator import check_rate_matrix, get_stationary_frequencies, get_normalised_generator, \
    get_diagonalisation, get_pij_matrix, EIGENVALUE_TOLERANCE

EMPIRICAL = 'EMPIRICAL'


def read_only(array):
    array = np.array(array, dtype=np.float64)
    array.setflags(write=False)
    return array


class EmpiricalModel(Model):
    """
    Substitution model defined by a fixed empirical rate matrix.

    At construction the stationary frequencies are extracted from the raw rate matrix,
    whose diagonal is then rebuilt and which is normalised to one expected substitution per unit of time.
    The normalised generator is diagonalised once, so that P(t) = V diag(exp(sigma t)) V^{-1} for any t.
    All of these are preset and cannot be changed.
    """

    def __init__(self, states, rate_matrix, name=EMPIRICAL, tolerance=EIGENVALUE_TOLERANCE, **kwargs):
        self._name = name
        self._states = np.array(states, dtype=str)
        raw_rate_matrix = check_rate_matrix(rate_matrix, self._states)
        self._state2index = dict(zip(self._states, range(len(self._states))))

        frequencies = get_stationary_frequencies(raw_rate_matrix, tolerance=tolerance)
        generator = get_normalised_generator(frequencies, raw_rate_matrix)
        sigma, V, Vi = get_diagonalisation(generator)

        self._frequencies = read_only(frequencies)
        self._rate_matrix = read_only(generator)
        self._sigma = read_only(sigma)
        self._V = read_only(V)
        self._Vi = read_only(Vi)

        logging.getLogger('wagmatrix').debug('Initialised {}'.format(self))

    @property
    def name(self):
        return self._name

    @property
    def frequencies(self):
        return self._frequencies

    @frequencies.setter
    def frequencies(self, frequencies):
        raise NotImplementedError('The frequencies are preset and cannot be changed.')

    @property
    def freqs(self):
        return self._frequencies

    @property
    def rate_matrix(self):
        """
        The normalised generator: rows sum to zero and -sum_i pi_i Q_ii = 1.
        """
        return self._rate_matrix

    @rate_matrix.setter
    def rate_matrix(self, rate_matrix):
        raise NotImplementedError('The rate matrix is preset and cannot be changed.')

    @property
    def Q(self):
        return self._rate_matrix

    @property
    def sigma(self):
        return self._sigma

    @property
    def V(self):
        return self._V

    @property
    def Vi(self):
        return self._Vi

    @property
    def states(self):
        return self._states

    def get_states(self, **kwargs):
        return self._states

    def get_frequencies(self, **kwargs):
        return self._frequencies

    def get_state_index(self, state):
        """
        Returns the row (and column) of the given state in the rate matrix.

        :param state: state name
        :return: int
        """
        if state not in self._state2index:
            raise ValueError('State {} is not allowed under the model {}.'.format(state, self.name))
        return self._state2index[state]

    def get_Pij_t(self, t, **kwargs):
        """
        Calculates the probability matrix of substitutions i->j over time t.

        :param t: time (branch length, in expected substitutions per site)
        :type t: float
        :return: probability matrix
        :rtype: numpy.ndarray
        """
        return get_pij_matrix(t, self._sigma, self._V, self._Vi)

    def print_parameters(self):
        return '\tfrequencies\t(fixed)\n' \
               '{}\n'.format('\n'.join('\t\t{}:\t{:g}'.format(state, freq)
                                       for (state, freq) in zip(self._states, self._frequencies)))

    def save_parameters(self, filepath, **kwargs):
        with open(filepath, 'w+') as filehandle:
            filehandle.write('parameter\tvalue\n')
            filehandle.write('{}\t{}\n'.format(MODEL, self.name))
            for state, frequency in zip(self._states, self._frequencies):
                filehandle.write('{}\t{}\n'.format(state, frequency))
        return filepath
