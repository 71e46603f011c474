"""Shared fixtures for tests."""

from pathlib import Path
from typing import Callable, Optional

import pytest
from lxml import etree

from converter.dom import parse_document
from converter.transform import XSD_NS

NS = {'xs': XSD_NS}

ORDER_PROFILE = """\
<bns:Component xmlns:bns="http://api.platform.boomi.com/" name="orderProfile" type="profile.xml">
  <bns:object>
    <XMLProfile modelVersion="2" strict="true"{namespace}>
      <ProfileProperties>
        <XMLGeneralInfo/>
      </ProfileProperties>
      <DataElements>
        <XMLElement dataType="character" key="1" name="order" minOccurs="1" maxOccurs="1">
          <XMLAttribute dataType="character" key="2" name="status" required="true"/>
          <XMLElement dataType="integer" key="3" name="id" minOccurs="1" maxOccurs="1"/>
          <XMLElement dataType="character" key="4" name="customer" minOccurs="1" maxOccurs="1">
            <XMLElement dataType="character" key="5" name="name" minLength="2" maxLength="40"/>
            <XMLElement dataType="character" key="6" name="email" minOccurs="0"/>
          </XMLElement>
          <XMLElement dataType="character" key="7" name="item" minOccurs="0" maxOccurs="1">
            <XMLElement dataType="character" key="8" name="sku" maxLength="12"/>
            <XMLElement dataType="number" key="9" name="price">
              <XMLAttribute dataType="character" key="10" name="currency" minLength="3" maxLength="3"/>
            </XMLElement>
          </XMLElement>
          <XMLElement dataType="character" key="11" name="item" minOccurs="1" maxOccurs="-1">
            <XMLElement dataType="character" key="12" name="sku" maxLength="12"/>
          </XMLElement>
          <XMLElement dataType="datetime" key="13" name="created" minOccurs="0"/>
        </XMLElement>
      </DataElements>
    </XMLProfile>
  </bns:object>
</bns:Component>
"""

JSON_PROFILE = """\
<JSONProfile strict="false">
  <DataElements>
    <JSONRootValue dataType="character" key="1" name="Root">
      <JSONObject key="2" name="Customer">
        <JSONObjectEntry dataType="character" key="3" name="name" required="true"/>
        <JSONObjectEntry dataType="integer" key="4" name="age"/>
        <JSONObjectEntry dataType="boolean" key="5" name="active"/>
        <JSONObjectEntry key="6" name="address">
          <JSONObject key="7">
            <JSONObjectEntry dataType="character" key="8" name="city" required="true"/>
          </JSONObject>
        </JSONObjectEntry>
        <JSONObjectEntry key="9" name="tags">
          <JSONArray key="10" itemType="character"/>
        </JSONObjectEntry>
        <JSONObjectEntry key="11" name="orders">
          <JSONArray key="12">
            <JSONObject key="13">
              <JSONObjectEntry dataType="number" key="14" name="total"/>
            </JSONObject>
          </JSONArray>
        </JSONObjectEntry>
      </JSONObject>
    </JSONRootValue>
  </DataElements>
</JSONProfile>
"""


def order_profile_text(namespace: Optional[str] = None) -> str:
    return ORDER_PROFILE.format(namespace=f' namespace="{namespace}"' if namespace else "")


@pytest.fixture
def xml_profile() -> Callable[..., etree._Element]:
    """Return a factory wrapping <XMLElement> markup into an <XMLProfile>."""

    def _make(elements: str, namespace: Optional[str] = None) -> etree._Element:
        attribute = f' namespace="{namespace}"' if namespace is not None else ""
        return parse_document(f"<XMLProfile{attribute}><DataElements>{elements}</DataElements></XMLProfile>")

    return _make


@pytest.fixture
def order_profile() -> etree._Element:
    return parse_document(order_profile_text())


@pytest.fixture
def namespaced_order_profile() -> etree._Element:
    return parse_document(order_profile_text("urn:example:orders"))


@pytest.fixture
def json_profile() -> etree._Element:
    return parse_document(JSON_PROFILE)


@pytest.fixture
def order_profile_file(tmp_path: Path) -> Path:
    path = tmp_path / "order.xml"
    path.write_text(order_profile_text(), encoding="utf-8")
    return path


@pytest.fixture
def json_profile_file(tmp_path: Path) -> Path:
    path = tmp_path / "customer.xml"
    path.write_text(JSON_PROFILE, encoding="utf-8")
    return path
