"""Measurement adapters and the quote pipeline."""

from roofquote.services.heuristic import HeuristicMeasurementAdapter
from roofquote.services.manual import ManualMeasurementAdapter
from roofquote.services.measurement import MeasurementAdapter, MeasurementAdapterChain
from roofquote.services.pipeline import QuotePipeline
from roofquote.services.third_party import ThirdPartyMeasurementAdapter

__all__ = [
    "HeuristicMeasurementAdapter",
    "ManualMeasurementAdapter",
    "MeasurementAdapter",
    "MeasurementAdapterChain",
    "QuotePipeline",
    "ThirdPartyMeasurementAdapter",
]
