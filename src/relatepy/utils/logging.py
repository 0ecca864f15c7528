""" Logging functionality for RelatePy.

Logging is controlled by the configuration file relatepy.cfg, which should be
placed in the current working directory (where the python script is initiated).
All logging-related information is located in a section in the cfg-file with
heading logging; see sample file below.

By default, timing is switched off. It can be turned on by setting the keyword
'active' to True.

Timing can be time consuming if applied to functions called many times: the relate
operation is typically called for a large number of geometry pairs, and writing a log
message for each call quickly becomes relevant. To log only parts of the code, all
functions are classified as relevant for the following (overlapping) categories

    all: Used to log all methods.
    geometry: Computations on the geometries themselves (turns, point inquiries).
    relate: The relate algorithm and the predicates built on it.
    utils: All (minor) utility-related functions.

Example logging section of relatepy.cfg:

    [logging]
    # Activate logging. Without this, the rest of the section has no effect
    active: True
    # To log all functions in RelatePy, there is no need for more information.

    # To only log specific sections, use e.g.
    sections: relate
    # multiple sections are separated by commas:
    sections: relate, geometry

Ordinary (non-timing) log messages are emitted through module level loggers named
after the module, and are controlled by the standard logging configuration of the
application.

"""
import functools
import inspect
import logging
import os
import time
from typing import Dict, Sequence

import relatepy as rp

__all__ = ["time_logger"]


# Try to access configuration information, as activated by the import of RelatePy
try:
    config: Dict = rp.config["logging"]
    raw_sections = config.get("sections", "all")
    active_sections = [s.strip().lower() for s in raw_sections.split(",")]
    logger_is_active = config.get("active", "false").strip().lower() == "true"
    always_log = "all" in active_sections

except KeyError:
    config = {}
    active_sections = ["all"]
    logger_is_active = False
    always_log = True

t_logger = logging.getLogger("relatepy.timer")
t_logger.setLevel(logging.INFO)


if logger_is_active and not t_logger.hasHandlers():
    # Add handler to write to file.
    time_handler = logging.FileHandler("RelatePyTimings.log")
    time_handler.setLevel(logging.INFO)
    time_formatter = logging.Formatter("%(message)s")
    time_handler.setFormatter(time_formatter)
    t_logger.addHandler(time_handler)

# Find where in the file path the directory 'relatepy' is located.
# We will use this below to strip away the common parts of file names.
# The separator (/ or \) depends on operating system.
separator = os.sep
_path_parts = __file__.split(separator)
path_length = len(_path_parts) - 1 - _path_parts[::-1].index("relatepy")


def time_logger(sections: Sequence[str]):
    """A decorator that measures elapsed time for a function.

    Parameters:
        sections: Logging categories the decorated function belongs to. The function
            is timed if logging is active and either 'all' or one of the categories
            is among the active sections.

    """

    # The double nested function is needed to allow decorators with arguments.
    def inner_func(func):
        @functools.wraps(func)
        def log_time(*args, **kwargs):
            if not logger_is_active:
                # Shortcut if logging is not activated.
                return func(*args, **kwargs)
            elif always_log or any([s in active_sections for s in sections]):
                # Get the name of the file, but strip away the part above
                # '/src/relatepy'
                fn = separator.join(
                    inspect.getfile(func).split(separator)[path_length + 1 :]
                )

                # String representation of the file
                name = f"{func.__name__} in file {fn}."

                t_logger.log(level=logging.INFO, msg=f"Calling {name}")

                start_time = time.perf_counter()
                value = func(*args, **kwargs)
                run_time = time.perf_counter() - start_time

                t_logger.log(
                    level=logging.INFO,
                    msg=f"Finished {name} Elapsed time: {run_time:.8f} s",
                )

                return value
            else:
                return func(*args, **kwargs)

        return log_time

    return inner_func
