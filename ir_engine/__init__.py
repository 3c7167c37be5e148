"""
ir_engine - French personal income tax (IR) computation engine

Pure, deterministic rules for one tax year: quotient familial, plafonnement,
décote, DOM abatement, PFU, CEHR, CDHR and prélèvements sociaux.

Modules:
    - core: Settings, logging, exceptions, default fiscal tables
    - domain.models: Pydantic models for settings, household, incomes and results
    - domain.calculator: Individual tax rules (bracket engine, capping, surtaxes...)
    - application.services: Orchestrator, settings loader, batch evaluation
"""

__version__ = "1.4.0"
