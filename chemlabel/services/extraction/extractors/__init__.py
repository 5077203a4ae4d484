from chemlabel.services.extraction.extractors.document_classifier import DocumentClassifier, DocumentType
from chemlabel.services.extraction.extractors.first_aid import FirstAidExtractor
from chemlabel.services.extraction.extractors.handling_storage import HandlingStorageExtractor
from chemlabel.services.extraction.extractors.hazards import (
    HazardCategoriesExtractor,
    HazardStatementExtractor,
    PictogramExtractor,
    SignalWordExtractor,
    hazard_section_text,
)
from chemlabel.services.extraction.extractors.hmis_ppe_deriver import HMISPPECodeDeriver, PPEFlags
from chemlabel.services.extraction.extractors.identification import CASExtractor, IdentificationExtractor
from chemlabel.services.extraction.extractors.ratings import RatingCodesExtractor
from chemlabel.services.extraction.extractors.section2_parser import GHSSection2Data, GHSSection2Parser
from chemlabel.services.extraction.extractors.section8_ppe_parser import PPERequirements, Section8PPEParser

__all__ = [
    "CASExtractor",
    "DocumentClassifier",
    "DocumentType",
    "FirstAidExtractor",
    "GHSSection2Data",
    "GHSSection2Parser",
    "HMISPPECodeDeriver",
    "HandlingStorageExtractor",
    "HazardCategoriesExtractor",
    "HazardStatementExtractor",
    "IdentificationExtractor",
    "PPEFlags",
    "PPERequirements",
    "PictogramExtractor",
    "RatingCodesExtractor",
    "Section8PPEParser",
    "SignalWordExtractor",
    "hazard_section_text",
]
