"""
CSDL test fixtures and configuration.

This module provides CSDL metadata documents for testing.
"""

import pytest

# =============================================================================
# Metadata Documents
# =============================================================================

PERSON_SCHEMA = """<?xml version="1.0" encoding="utf-8"?>
<edmx:Edmx Version="4.0" xmlns:edmx="http://docs.oasis-open.org/odata/ns/edmx">
  <edmx:DataServices>
    <Schema Namespace="Test" xmlns="http://docs.oasis-open.org/odata/ns/edm">
      <ComplexType Name="Person">
        <Property Name="name" Type="Edm.String" />
        <Property Name="age" Type="Edm.Int32" />
      </ComplexType>
    </Schema>
  </edmx:DataServices>
</edmx:Edmx>"""

PERSON_WITH_PETS_SCHEMA = """<?xml version="1.0" encoding="utf-8"?>
<edmx:Edmx Version="4.0" xmlns:edmx="http://docs.oasis-open.org/odata/ns/edmx">
  <edmx:DataServices>
    <Schema Namespace="Test" xmlns="http://docs.oasis-open.org/odata/ns/edm">
      <ComplexType Name="Person">
        <Property Name="name" Type="Edm.String" />
        <Property Name="age" Type="Edm.Int32" />
        <Property Name="pets" Type="Collection(Test.Pet)" />
      </ComplexType>
      <ComplexType Name="Pet">
        <Property Name="petName" Type="Edm.String" />
      </ComplexType>
    </Schema>
  </edmx:DataServices>
</edmx:Edmx>"""

UNKNOWN_TYPE_SCHEMA = """<?xml version="1.0" encoding="utf-8"?>
<Schema Namespace="Test" xmlns="http://docs.oasis-open.org/odata/ns/edm">
  <ComplexType Name="Person">
    <Property Name="name" Type="Edm.String" />
    <Property Name="mystery" Type="Unknown.Type" />
    <Property Name="age" Type="Edm.Int32" />
  </ComplexType>
</Schema>"""

ENTITY_SCHEMA = """<?xml version="1.0" encoding="utf-8"?>
<edmx:Edmx Version="4.0" xmlns:edmx="http://docs.oasis-open.org/odata/ns/edmx">
  <edmx:DataServices>
    <Schema Namespace="microsoft.graph" Alias="graph" xmlns="http://docs.oasis-open.org/odata/ns/edm">
      <EntityType Name="driveItem" BaseType="microsoft.graph.baseItem" OpenType="true">
        <Key>
          <PropertyRef Name="id" />
        </Key>
        <Property Name="id" Type="Edm.String" Nullable="false" />
        <Property Name="size" Type="Edm.Int64" />
        <Property Name="content" Type="Edm.Stream" />
        <Property Name="file" Type="microsoft.graph.file" />
        <NavigationProperty Name="children" Type="Collection(microsoft.graph.driveItem)" />
      </EntityType>
      <ComplexType Name="file">
        <Property Name="mimeType" Type="Edm.String" />
        <Property Name="hashes" Type="microsoft.graph.hashes" />
      </ComplexType>
      <ComplexType Name="hashes">
        <Property Name="sha1Hash" Type="Edm.String" />
      </ComplexType>
      <EntityType Name="baseItem" Abstract="true">
        <Key>
          <PropertyRef Name="id" />
        </Key>
        <Property Name="id" Type="Edm.String" Nullable="false" />
        <Property Name="lastModifiedDateTime" Type="Edm.DateTimeOffset" />
      </EntityType>
    </Schema>
  </edmx:DataServices>
</edmx:Edmx>"""

CROSS_SCHEMA = """<?xml version="1.0" encoding="utf-8"?>
<edmx:Edmx Version="4.0" xmlns:edmx="http://docs.oasis-open.org/odata/ns/edmx">
  <edmx:DataServices>
    <Schema Namespace="Contoso.Sales" xmlns="http://docs.oasis-open.org/odata/ns/edm">
      <EntityType Name="Order">
        <Key><PropertyRef Name="orderId" /></Key>
        <Property Name="orderId" Type="Edm.Int32" />
        <Property Name="shipTo" Type="Contoso.Common.Address" />
        <Property Name="tags" Type="Collection(Edm.String)" />
      </EntityType>
    </Schema>
    <Schema Namespace="Contoso.Common" xmlns="http://docs.oasis-open.org/odata/ns/edm">
      <ComplexType Name="Address">
        <Property Name="street" Type="Edm.String" />
        <Property Name="isPrimary" Type="Edm.Boolean" />
      </ComplexType>
    </Schema>
  </edmx:DataServices>
</edmx:Edmx>"""

CYCLIC_SCHEMA = """<?xml version="1.0" encoding="utf-8"?>
<Schema Namespace="Cycle" xmlns="http://docs.oasis-open.org/odata/ns/edm">
  <ComplexType Name="A">
    <Property Name="label" Type="Edm.String" />
    <Property Name="b" Type="Cycle.B" />
  </ComplexType>
  <ComplexType Name="B">
    <Property Name="a" Type="Cycle.A" />
    <Property Name="siblings" Type="Collection(Cycle.B)" />
  </ComplexType>
  <EntityType Name="Node">
    <Property Name="value" Type="Edm.Int32" />
    <Property Name="parent" Type="Cycle.Node" />
  </EntityType>
</Schema>"""

DUPLICATE_TYPE_SCHEMA = """<?xml version="1.0" encoding="utf-8"?>
<edmx:Edmx Version="4.0" xmlns:edmx="http://docs.oasis-open.org/odata/ns/edmx">
  <edmx:DataServices>
    <Schema Namespace="Dup" xmlns="http://docs.oasis-open.org/odata/ns/edm">
      <ComplexType Name="Thing">
        <Property Name="first" Type="Edm.String" />
      </ComplexType>
      <ComplexType Name="Holder">
        <Property Name="thing" Type="Dup.Thing" />
        <Property Name="count" Type="Edm.Int16" />
      </ComplexType>
    </Schema>
    <Schema Namespace="Dup" xmlns="http://docs.oasis-open.org/odata/ns/edm">
      <ComplexType Name="Thing">
        <Property Name="second" Type="Edm.String" />
      </ComplexType>
    </Schema>
  </edmx:DataServices>
</edmx:Edmx>"""

NO_SCHEMA_DOCUMENT = """<?xml version="1.0" encoding="utf-8"?>
<edmx:Edmx Version="4.0" xmlns:edmx="http://docs.oasis-open.org/odata/ns/edmx">
  <edmx:DataServices />
</edmx:Edmx>"""

MALFORMED_XML = """<?xml version="1.0" encoding="utf-8"?>
<Schema Namespace="Broken">
  <ComplexType Name="Person">
    <Property Name="name" Type="Edm.String">
  </ComplexType>
"""

ENTITY_EXPANSION_XML = """<?xml version="1.0"?>
<!DOCTYPE lolz [
  <!ENTITY lol "lol">
  <!ENTITY lol2 "&lol;&lol;&lol;&lol;&lol;&lol;&lol;&lol;&lol;&lol;">
]>
<Schema Namespace="Evil"><ComplexType Name="&lol2;" /></Schema>"""


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def person_schema():
    """Single complex type with two scalar properties."""
    return PERSON_SCHEMA


@pytest.fixture
def person_with_pets_schema():
    """Person with a collection of a second complex type."""
    return PERSON_WITH_PETS_SCHEMA


@pytest.fixture
def unknown_type_schema():
    """Person with a property of an undeclared type."""
    return UNKNOWN_TYPE_SCHEMA


@pytest.fixture
def entity_schema():
    """Entity types with keys, navigation and stream properties."""
    return ENTITY_SCHEMA


@pytest.fixture
def cross_schema():
    """Two schemas where one references a type of the other."""
    return CROSS_SCHEMA


@pytest.fixture
def cyclic_schema():
    """Mutually and self referencing types."""
    return CYCLIC_SCHEMA


@pytest.fixture
def duplicate_type_schema():
    """Two schemas declaring the same qualified type name."""
    return DUPLICATE_TYPE_SCHEMA


@pytest.fixture
def no_schema_document():
    """Well-formed EDMX without any Schema element."""
    return NO_SCHEMA_DOCUMENT


@pytest.fixture
def malformed_xml():
    """XML with an unclosed element."""
    return MALFORMED_XML


@pytest.fixture
def entity_expansion_xml():
    """XML declaring internal entities."""
    return ENTITY_EXPANSION_XML
