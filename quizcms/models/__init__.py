from quizcms.models.base import Base, get_db, get_production_db
from quizcms.models.application import Application, ApplicationSection
from quizcms.models.media import Album, Art, Book, Film, MediaFile
from quizcms.models.section import Section, SectionStep
from quizcms.models.step import Step
from quizcms.models.template import DeployedTemplate

__all__ = [
    "Base",
    "Application",
    "ApplicationSection",
    "Section",
    "SectionStep",
    "Step",
    "MediaFile",
    "Art",
    "Film",
    "Album",
    "Book",
    "DeployedTemplate",
    "get_db",
    "get_production_db",
]
