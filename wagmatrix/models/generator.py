import logging

import numpy as np

EIGENVALUE_TOLERANCE = 1e-8


class InvalidMatrixError(ValueError):
    """ Error raised when a rate matrix cannot be turned into a valid normalised generator. """

    def __init__(self, *args, **kwargs):
        ValueError.__init__(self, *args, **kwargs)


def check_rate_matrix(rate_matrix, states=None):
    """
    Checks that the rate matrix is a square matrix of finite values (and matches the states if they are given).

    :param rate_matrix: rate matrix to be checked
    :type rate_matrix: numpy.ndarray
    :param states: (optional) state names, one per matrix row
    :return: the rate matrix as a float64 numpy array
    :rtype: numpy.ndarray
    """
    rate_matrix = np.array(rate_matrix, dtype=np.float64)
    if not len(rate_matrix.shape) == 2 or not rate_matrix.shape[0] == rate_matrix.shape[1]:
        raise ValueError('The rate matrix must be squared, but yours is {}.'
                         .format('x'.join(str(_) for _ in rate_matrix.shape)))
    if not np.all(np.isfinite(rate_matrix)):
        raise ValueError('The rate matrix must contain finite values only.')
    if states is not None and len(states) != len(rate_matrix):
        raise ValueError('The number of specified states ({}) does not correspond to the rate matrix dimensions ({}x{}).'
                         .format(len(states), *rate_matrix.shape))
    return rate_matrix


def get_stationary_frequencies(rate_matrix, tolerance=EIGENVALUE_TOLERANCE):
    """
    Extracts the stationary distribution pi (such that pi^T Q = 0) of the given rate matrix Q,
    as the eigenvector of Q^T corresponding to its zero eigenvalue, normalised to sum to one.

    All the eigenvalues of a generator have non-positive real parts,
    hence the zero one is expected to be the largest.

    :param rate_matrix: (possibly unnormalised) rate matrix Q
    :type rate_matrix: numpy.ndarray
    :param tolerance: absolute tolerance for the zero eigenvalue and for negative frequencies
    :type tolerance: float
    :return: array of stationary frequencies
    :rtype: numpy.ndarray
    """
    try:
        sigma, V = np.linalg.eig(rate_matrix.transpose())
    except np.linalg.LinAlgError as e:
        raise InvalidMatrixError('Invalid Q-Matrix: could not diagonalise its transpose ({}).'.format(e)) from e
    sigma = sigma.real
    i_zero = np.argmax(sigma)
    if np.abs(sigma[i_zero]) >= tolerance:
        raise InvalidMatrixError('Invalid Q-Matrix: its largest eigenvalue ({:g}) is not zero.'.format(sigma[i_zero]))
    n_zeros = np.count_nonzero(np.abs(sigma) < tolerance)
    if n_zeros > 1:
        raise InvalidMatrixError('Invalid Q-Matrix: it has {} zero eigenvalues instead of one, '
                                 'its stationary distribution is not unique.'.format(n_zeros))
    logging.getLogger('wagmatrix').debug('Found the zero eigenvalue {:g} at position {}.'.format(sigma[i_zero], i_zero))

    eigenvector = V[:, i_zero].real
    total = eigenvector.sum()
    if total == 0 or not np.isfinite(total):
        raise InvalidMatrixError('Invalid Q-Matrix: its stationary eigenvector cannot be normalised.')
    frequencies = eigenvector / total
    if np.any(frequencies < -tolerance):
        raise InvalidMatrixError('Invalid Q-Matrix: its stationary distribution contains negative values ({}).'
                                 .format(frequencies[frequencies < -tolerance]))
    # round-off noise around zero
    frequencies = np.maximum(frequencies, 0)
    return frequencies / frequencies.sum()


def get_generator(rate_matrix):
    """
    Rebuilds the diagonal of the rate matrix so that each row sums to zero.
    The original diagonal values are discarded.

    :param rate_matrix: rate matrix
    :type rate_matrix: numpy.ndarray
    :return: generator with diagonal values set to minus the sum of the off-diagonal row values
    :rtype: numpy.ndarray
    """
    generator = np.array(rate_matrix, dtype=np.float64)
    np.fill_diagonal(generator, 0)
    generator -= np.diag(generator.sum(axis=1))
    return generator


def get_mu(generator, frequencies):
    """
    Calculates the average substitution rate at stationarity: mu = -sum_i pi_i Q_ii.

    :param generator: generator matrix Q
    :param frequencies: stationary frequencies pi
    :return: mu
    :rtype: float
    """
    return -generator.diagonal().dot(frequencies)


def get_normalised_generator(frequencies, rate_matrix):
    """
    Calculates the generator matrix from the rate matrix, normalised so that the expected number
    of substitutions per unit of time at stationarity is one, i.e. -sum_i pi_i Q_ii = 1.

    :param frequencies: stationary frequencies pi
    :type frequencies: numpy.ndarray
    :param rate_matrix: rate matrix
    :type rate_matrix: numpy.ndarray
    :return: normalised generator Q
    :rtype: numpy.ndarray
    """
    generator = get_generator(rate_matrix)
    mu = get_mu(generator, frequencies)
    if not np.isfinite(mu) or mu <= 0:
        raise InvalidMatrixError('Invalid Q-Matrix: the average substitution rate ({:g}) must be positive.'.format(mu))
    logging.getLogger('wagmatrix').debug('Normalising the generator by the average substitution rate {:g}.'.format(mu))
    return generator / mu


def get_diagonalisation(generator):
    """
    Diagonalises the generator: Q = V diag(sigma) V^{-1}.

    :param generator: normalised generator Q
    :type generator: numpy.ndarray
    :return: tuple (sigma, V, V^{-1}) of real eigenvalues, eigenvectors (columns) and the inverse eigenvector matrix
    :rtype: tuple(numpy.ndarray, numpy.ndarray, numpy.ndarray)
    """
    try:
        sigma, V = np.linalg.eig(generator)
        V = V.real
        # LU only fails on exactly singular matrices, numerically singular ones are caught here
        if np.linalg.cond(V) > 1 / np.finfo(np.float64).eps:
            raise np.linalg.LinAlgError('Singular eigenvector matrix')
        Vi = np.linalg.inv(V)
    except np.linalg.LinAlgError as e:
        raise InvalidMatrixError('Invalid Q-Matrix: could not diagonalise it ({}).'.format(e)) from e
    return sigma.real, V, Vi


def get_pij_matrix(t, sigma, V, Vi):
    """
    Calculates the probability matrix of substitutions i->j over time t,
    given the diagonalisation of the normalised generator: P(t) = exp(Qt) = V diag(exp(sigma t)) V^{-1}.

    :param t: time
    :type t: float
    :param sigma: eigenvalues of the generator
    :type sigma: numpy.ndarray
    :param V: eigenvector matrix
    :type V: numpy.ndarray
    :param Vi: inverse of the eigenvector matrix
    :type Vi: numpy.ndarray
    :return: probability matrix
    :rtype: numpy.ndarray
    """
    if t < 0:
        raise ValueError('Time must be non-negative, got {}.'.format(t))
    p = (V * np.exp(sigma * t)).dot(Vi)
    return np.maximum(p, 0)
