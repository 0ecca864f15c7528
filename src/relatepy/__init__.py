"""   RelatePy.

Root directory for the RelatePy package. Contains the following sub-packages:

geometry: Linear geometries, point inquiries, boundary rules and computation of
    intersection events (turns) between two linear geometries.

relate: The DE-9IM relation matrix, ordering of turns and the linear/linear relate
    algorithm, together with named spatial predicates.

utils: Logging, array operations and shared types.


isort:skip_file

"""

import os
from pathlib import Path
import configparser


__version__ = "0.1.0"

# Try to read the config file from the directory where python process was launched
try:
    cwd = Path(os.getcwd())
    pth = cwd / Path("relatepy.cfg")
    cfg = configparser.ConfigParser()
    cfg.read(pth)
    config = {key: dict(section) for key, section in cfg.items()}
except (OSError, configparser.Error):
    # the assumption is that no configurations are given
    config = {}

# ------------------------------------
# Simplified namespaces. The rule of thumb is that classes and modules that a
# user can be exposed to should have a shortcut here.

from relatepy.utils.common_constants import *
from relatepy.utils.relatepy_types import *
from relatepy.utils.logging import time_logger
from relatepy.utils import array_operations

# Geometry
from relatepy.geometry import (
    linear,
    geometry_property_checks,
    boundary,
    intersections,
)
from relatepy.geometry.linear import (
    Linestring,
    MultiLinestring,
    SegmentId,
    LinestringKind,
    as_linear_geometry,
    check_linestring_kind,
)
from relatepy.geometry.geometry_property_checks import (
    PointLocation,
    point_in_linear_geometry,
)
from relatepy.geometry.boundary import BoundaryChecker, BoundaryQuery
from relatepy.geometry.intersections import (
    Turn,
    TurnInfo,
    TurnMethod,
    TurnOperation,
    get_turns,
)

# Relate
from relatepy.relate.matrix import Location, RelationMatrix
from relatepy.relate import turn_ordering, disjoint_linestrings, analyser
from relatepy.relate.linear_linear import relate
from relatepy.relate.predicates import (
    relate_pattern,
    equals,
    disjoint,
    intersects,
    touches,
    crosses,
    within,
    contains,
    overlaps,
    covers,
    covered_by,
)
