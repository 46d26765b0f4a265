"""
XML package for PANClient.

- panclient.core.xml.builder: AddressPath, ConfigFragment and FragmentBuilder
- panclient.core.xml.codec: response parsing, classification and record decoding
"""

from .builder import AddressPath, ConfigFragment, FragmentBuilder, FragmentNode, xpath_literal
from .codec import (
    check_response,
    classify_response,
    decode_records,
    element_to_dict,
    find_entries,
    parse_response,
    response_message,
    result_fields,
    result_text,
)
