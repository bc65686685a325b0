# cpsclient/utils/__init__.py

from .config_loader import CpsConfig, LoggingSection, load_config
from .logger import setup_logger
from .model_tools import model_from_node, parse_node_to_dict
from .xml_builder import build_request_xml, normalize_values
from .xml_parser import XmlNode, parse_xml

__all__: list[str] = [
    # config_loader.py
    'CpsConfig',
    'LoggingSection',
    'load_config',
    # logger.py
    'setup_logger',
    # model_tools.py
    'model_from_node',
    'parse_node_to_dict',
    # xml_builder.py
    'build_request_xml',
    'normalize_values',
    # xml_parser.py
    'XmlNode',
    'parse_xml',
]
