# Service layer package
from . import render
