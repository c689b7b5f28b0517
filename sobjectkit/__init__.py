"""Client for the Salesforce SObject REST resources and the composite SObject Tree API."""

__version__ = "3.0.0"