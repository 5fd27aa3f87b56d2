from abc import ABC, abstractmethod

MODEL = 'model'


class Model(ABC):

    @property
    @abstractmethod
    def name(self):
        """
        Returns the model name.

        :return: str
        """
        pass

    @abstractmethod
    def get_states(self, **kwargs):
        """
        Returns model states.

        :return: np.array of states, in the order of the rate matrix rows
        """
        pass

    @abstractmethod
    def get_frequencies(self, **kwargs):
        """
        Returns the equilibrium frequencies.

        :return: the np.array with the equilibrium frequencies
        """
        pass

    @abstractmethod
    def get_Pij_t(self, t, **kwargs):
        """
        Returns the probability matrix of substitutions i->j over time t.

        :return: probability matrix
        :rtype: np.array
        """
        pass

    @abstractmethod
    def print_parameters(self):
        """
        Constructs a string representing parameter values (to be used for logging).

        :return: str representing parameter values
        """
        pass

    @abstractmethod
    def save_parameters(self, filepath, **kwargs):
        """
        Writes this model parameter values to the parameter file.

        :param filepath: path to the file where the parameter values should be written.
        :return: the actual filepath used
        """
        pass

    def __str__(self):
        return \
            'Model {} with parameter values:\n' \
            '{}'.format(self.name, self.print_parameters())
