"""Line classifiers for the orgstream scanner.

Each classifier is a mixin that decides whether a line matches one
structural pattern. Classifiers are pure: they never move the scan
position.
"""

from orgstream.scanner.classifiers.block import BlockClassifierMixin
from orgstream.scanner.classifiers.drawer import DrawerClassifierMixin
from orgstream.scanner.classifiers.headline import HeadlineClassifierMixin
from orgstream.scanner.classifiers.list import ListClassifierMixin
from orgstream.scanner.classifiers.planning import PlanningClassifierMixin
from orgstream.scanner.classifiers.table import TableClassifierMixin

__all__ = [
    "BlockClassifierMixin",
    "DrawerClassifierMixin",
    "HeadlineClassifierMixin",
    "ListClassifierMixin",
    "PlanningClassifierMixin",
    "TableClassifierMixin",
]
