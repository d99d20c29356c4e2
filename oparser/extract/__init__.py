"""
Overlay extraction stages.

Modules:
- select: interface/VRF pair selection
- resolve: policy-map and route-policy name resolution
- stanzas: single-line stanza extraction (vrf, interface, router bgp/static/hsrp)
- blocks: delimited policy block extraction
- pipeline: runs the stages in order
"""

from oparser.extract.pipeline import ExtractionResult, extract_from_entries, run_pipeline

__all__ = ["ExtractionResult", "extract_from_entries", "run_pipeline"]
