from urlshortener.models.association_model import AssociationModel
from urlshortener.models.parsed_url_model import ParsedUrlModel
from urlshortener.models.result_model import ErrorInfo, Result


__all__ = [
    'AssociationModel',
    'ParsedUrlModel',
    'ErrorInfo',
    'Result',
]
