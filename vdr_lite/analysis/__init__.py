from vdr_lite.analysis.factory import GatewayFactory
from vdr_lite.analysis.gateway import LanguageModelGateway
from vdr_lite.analysis.models import DocumentFinding

__all__ = ["DocumentFinding", "GatewayFactory", "LanguageModelGateway"]
