# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from xml.etree import ElementTree as ET


def parse_xml(body: bytes) -> ET.Element:
    """Parse a response document, dropping namespaces from every tag.

    Responses are matched on local element names only, regardless of the API version
    namespace the service declares.
    """
    root = ET.fromstring(body)
    for elem in root.iter():
        if isinstance(elem.tag, str) and "}" in elem.tag:
            elem.tag = elem.tag.split("}", 1)[1]
    return root


def find_text(elem: ET.Element, path: str, default: str = "") -> str:
    found = elem.find(path)
    if found is None or found.text is None:
        return default
    return found.text
