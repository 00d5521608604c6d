"""
Rooftop rainwater harvesting (RTRWH) assessment package

Turns a household/site description into a feasibility score, recommended
structures with sizes and costs, a financial model and an environmental
estimate.

Main Classes:
    - AssessmentEngine: pure calculation, one input -> one result
    - ReferenceTables: typed access to the rainfall/aquifer/cost tables
    - TableRegionProfileResolver: address -> rainfall + aquifer profile
    - AssessmentStore: SQLite storage for saved assessments and statistics

Entry points:
    - run_assessment: validate, calculate, diagnose, optionally persist
    - calculate_assessment: engine only
"""

from .engine import AssessmentEngine, calculate_assessment
from .models import (
    AssessmentInput,
    AssessmentResult,
    FeasibilityCategory,
    LocationInfo,
    MaintenanceLevel,
    Preferences,
    PrimaryUse,
    PropertyInfo,
    RoofType,
    StructureType,
)
from .pipeline import AssessmentRun, run_assessment
from .reference_tables import ReferenceTables, default_reference_tables, load_reference_tables
from .region import RegionDataProvider, RegionProfile, TableRegionProfileResolver
from .data_tables import AssessmentStore
from .validation import InvalidAssessmentInput, validate_assessment_input

__all__ = [
    'AssessmentEngine',
    'calculate_assessment',
    'run_assessment',
    'AssessmentRun',

    'AssessmentInput',
    'AssessmentResult',
    'LocationInfo',
    'PropertyInfo',
    'Preferences',
    'RoofType',
    'MaintenanceLevel',
    'PrimaryUse',
    'FeasibilityCategory',
    'StructureType',

    'ReferenceTables',
    'load_reference_tables',
    'default_reference_tables',
    'RegionDataProvider',
    'RegionProfile',
    'TableRegionProfileResolver',

    'AssessmentStore',
    'InvalidAssessmentInput',
    'validate_assessment_input',
]
