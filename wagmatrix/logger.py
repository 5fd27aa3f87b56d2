import logging

LOG_FORMAT = '%(name)s:%(levelname)s:%(asctime)s %(message)s'


def set_up_wagmatrix_logger(verbose, default_level=logging.ERROR, log_file=None):
    """
    Configures the wagmatrix logger (only once, later calls just update its level).

    :param verbose: whether to log debug messages
    :param default_level: level to use when not verbose
    :param log_file: (optional) path to a file where the messages should be written instead of stderr
    :return: the logger
    """
    logger = logging.getLogger('wagmatrix')
    logger.setLevel(level=logging.DEBUG if verbose else default_level)
    logger.propagate = False
    if not logger.hasHandlers():
        handler = logging.FileHandler(log_file) if log_file else logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    return logger
