import logging
import os

import numpy as np
import pandas as pd

from wagmatrix.models.generator import check_rate_matrix


def save_matrix(states, matrix, outfile):
    """
    Writes the matrix to a space-delimited file, whose first line lists the state names preceded by #.

    :param states: state names, one per matrix row
    :param matrix: square matrix to be saved
    :param outfile: path to the output file
    :return: void
    """
    np.savetxt(outfile, matrix, delimiter=' ', fmt='%.18e', header=' '.join(states))


def load_matrix(infile):
    """
    Reads a matrix saved with save_matrix.

    :param infile: path to the input file
    :return: tuple (states, matrix)
    :rtype: tuple(np.array, np.array)
    """
    matrix = np.loadtxt(infile, dtype=np.float64, comments='#', delimiter=' ', ndmin=2)
    matrix = check_rate_matrix(matrix)
    n = len(matrix)
    if np.count_nonzero(matrix - np.diag(matrix.diagonal())) != n * (n - 1):
        logging.getLogger('wagmatrix').warning('The matrix in {} contains zero rates (apart from the diagonal).'
                                               .format(infile))
    with open(infile, 'r') as f:
        states = f.readline()
        if not states.startswith('#'):
            raise ValueError('The matrix file should start with state names, '
                             'separated by whitespaces and preceded by # .')
        states = np.array(states.strip('#').strip('\n').strip().split(' '), dtype=str)
        if len(states) != n:
            raise ValueError(
                'The number of specified state names ({}) does not correspond to the matrix dimensions ({}x{}).'
                .format(len(states), *matrix.shape))
    return states, matrix


def load_parameters(filepath):
    """
    Reads model parameters from a tab-delimited table
    with the first column containing parameter names and the second (named 'value') containing values.

    :param filepath: path to the parameter file
    :return: dict {parameter name: value}
    """
    if not os.path.exists(filepath):
        raise ValueError('The specified parameter file ({}) does not exist.'.format(filepath))
    df = pd.read_csv(filepath, header=0, index_col=0, sep='\t', dtype=str)
    if 'value' not in df.columns:
        raise ValueError('Could not find the "value" column in the parameter file {}. '
                         'It should be a tab-delimited file with two columns, '
                         'the first one containing parameter names, '
                         'and the second, named "value", containing parameter values.'.format(filepath))
    return df['value'].to_dict()
