"""Tests for generating, importing and using declarations from a sample Swagger 2.0 page."""

import importlib.util
import json
import sys
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from specgen.config_loader import load_generator_config
from specgen.generate.emit_declarations import GENERATED_HEADER
from specgen.generate.generate_schema import generate_declarations, generate_file, main, parse_file

TESTDATA = Path(__file__).resolve().parent / "testdata"
SAMPLE_HTML = TESTDATA / "spec_sample.html"
CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "special_types.yaml"


@pytest.fixture(scope="module")
def generated(tmp_path_factory):
    """Generate the sample declarations and import them as a module."""
    output = tmp_path_factory.mktemp("generated") / "petstore_schema.py"
    generate_file(SAMPLE_HTML, output, load_generator_config(CONFIG_PATH))
    spec = importlib.util.spec_from_file_location("petstore_schema", output)
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    yield module
    sys.modules.pop(spec.name, None)


@pytest.fixture(scope="module")
def generated_source(generated):
    return Path(generated.__file__).read_text(encoding="utf-8")


# ===== GENERATION TESTS =====

def test_generated_header(generated_source):
    assert generated_source.startswith(GENERATED_HEADER)


def test_generated_objects_in_document_order(generated_source):
    classes = [
        line.split("(")[0][len("class "):]
        for line in generated_source.splitlines()
        if line.startswith("class ")
    ]
    assert classes == [
        "Swagger", "Info", "Contact", "License", "PathItem", "Operation",
        "Parameter", "Response", "Header", "Schema", "SecurityScheme",
    ]


def test_special_types_are_aliases(generated):
    """Mapping-typed objects are declared from configuration, not scanned tables."""
    assert generated.Paths == dict[str, generated.PathItem]
    assert generated.Responses == dict[str, generated.Response]
    assert generated.SecurityRequirement == dict[str, list[str]]
    assert generated.Definitions == dict[str, generated.Schema]


def test_special_type_comment_is_kept(generated_source):
    assert "# Holds the relative paths to the individual endpoints.\nPaths = dict[str, PathItem]" in generated_source


def test_objects_after_catalogue_are_ignored(generated):
    assert not hasattr(generated, "Extension")


def test_field_declarations(generated_source):
    assert '    swagger: str = Field(..., alias="swagger")' in generated_source
    assert '    info: Optional[Info] = Field(..., alias="info")' in generated_source
    assert '    base_path: Optional[str] = Field(None, alias="basePath")' in generated_source
    assert '    schemes: Optional[list[str]] = Field(None, alias="schemes")' in generated_source
    assert '    paths: Paths = Field(..., alias="paths")' in generated_source
    assert '    security: Optional[list[SecurityRequirement]] = Field(None, alias="security")' in generated_source
    assert '    ref: Optional[str] = Field(None, alias="$ref")' in generated_source
    assert '    parameters: Optional[list[Parameter]] = Field(None, alias="parameters")' in generated_source


def test_field_comments(generated_source):
    assert (
        "    # Specifies the Swagger Specification version being used.\n"
        '    swagger: str = Field(..., alias="swagger")'
    ) in generated_source


def test_required_marker_needs_period(generated):
    """'Required.' marks a field; 'Required' without the period does not."""
    fields = generated.SecurityScheme.model_fields
    assert fields["name"].is_required()
    assert not fields["in_"].is_required()
    assert generated.Info.model_fields["version"].is_required()


def test_header_object_declared_without_fixed_fields(generated):
    fields = generated.Header.model_fields
    assert list(fields) == ["description", "type", "format"]
    assert fields["type"].is_required()


def test_permuted_columns(generated):
    assert list(generated.Contact.model_fields) == ["name", "url", "email"]


# ===== ROUND TRIP TESTS =====

@pytest.mark.parametrize(
    "filename,load",
    [
        ("petstore-minimal.json", json.loads),
        ("petstore-minimal.yaml", yaml.safe_load),
    ],
)
def test_parse_petstore_minimal(generated, filename, load):
    """Both serializations decode into the declarations without losing fields."""
    data = load((TESTDATA / filename).read_text(encoding="utf-8"))
    doc = generated.Swagger.model_validate(data)

    assert doc.swagger == "2.0"
    assert doc.info.title == "Swagger Petstore"
    assert doc.info.contact.name == "Swagger API Team"
    assert doc.info.license.name == "MIT"
    assert doc.base_path == "/api"
    assert doc.schemes == ["http"]
    get = doc.paths["/pets"].get
    assert get.produces == ["application/json"]
    response = get.responses["200"]
    assert response.description == "A list of pets."
    assert response.schema_.type == "array"
    assert response.schema_.items.ref == "#/definitions/Pet"
    pet = doc.definitions["Pet"]
    assert pet.required == ["id", "name"]
    assert pet.properties["id"].format == "int64"

    assert doc.model_dump(by_alias=True, exclude_none=True) == data


def test_json_and_yaml_agree(generated):
    from_json = generated.Swagger.model_validate(
        json.loads((TESTDATA / "petstore-minimal.json").read_text(encoding="utf-8"))
    )
    from_yaml = generated.Swagger.model_validate(
        yaml.safe_load((TESTDATA / "petstore-minimal.yaml").read_text(encoding="utf-8"))
    )
    assert from_json == from_yaml


def test_missing_required_field(generated):
    with pytest.raises(ValidationError):
        generated.Swagger.model_validate({"swagger": "2.0", "paths": {}})


def test_optional_field_accepts_null(generated):
    """A key written without a value loads as None and is left unset."""
    info = generated.Info.model_validate(
        yaml.safe_load("title: Petstore\nversion: '1.0'\ndescription:\n")
    )
    assert info.description is None
    info = generated.Info.model_validate({"title": "Petstore", "version": "1.0", "description": None})
    assert info.model_dump(by_alias=True, exclude_none=True) == {"title": "Petstore", "version": "1.0"}


def test_required_field_rejects_null(generated):
    with pytest.raises(ValidationError):
        generated.Info.model_validate({"title": None, "version": "1.0"})


def test_keyword_field_alias(generated):
    param = generated.Parameter.model_validate({"name": "id", "in": "path", "required": True})
    assert param.in_ == "path"
    assert param.model_dump(by_alias=True, exclude_none=True) == {
        "name": "id", "in": "path", "required": True,
    }


# ===== DRIVER TESTS =====

def test_parse_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_file(tmp_path / "2.0.html")


def test_generate_declarations_uses_given_config():
    config = load_generator_config(CONFIG_PATH).model_copy(update={"special_types": []})
    source = generate_declarations(parse_file(SAMPLE_HTML), config)
    assert "Paths = " not in source
    assert "class Swagger(BaseModel):" in source


def test_main_writes_output(tmp_path, capsys):
    output = tmp_path / "out" / "schema.py"
    code = main([
        "--input", str(SAMPLE_HTML),
        "--output", str(output),
        "--config", str(CONFIG_PATH),
    ])
    assert code == 0
    assert output.read_text(encoding="utf-8").startswith(GENERATED_HEADER)
    out = capsys.readouterr().out
    assert "Generated 11 object(s) and 10 special type(s)" in out
    assert "[OK]" in out


def test_main_fails_without_anchor(tmp_path, capsys):
    html = tmp_path / "2.0.html"
    html.write_text("<html><body><h4>Pet Object</h4></body></html>", encoding="utf-8")
    output = tmp_path / "schema.py"
    code = main(["--input", str(html), "--output", str(output), "--config", str(CONFIG_PATH)])
    assert code == 2
    assert not output.exists()
    assert "ERROR:" in capsys.readouterr().err


def test_main_fails_on_missing_input(tmp_path, capsys):
    code = main(["--input", str(tmp_path / "missing.html"), "--output", str(tmp_path / "schema.py")])
    assert code == 2
    assert "not found" in capsys.readouterr().err


def test_main_fails_on_invalid_config(tmp_path, capsys):
    config_file = tmp_path / "special_types.yaml"
    config_file.write_text("special_types: [\n", encoding="utf-8")
    output = tmp_path / "schema.py"
    code = main(["--input", str(SAMPLE_HTML), "--output", str(output), "--config", str(config_file)])
    assert code == 2
    assert not output.exists()
    err = capsys.readouterr().err
    assert "ERROR: Invalid YAML" in err


def test_main_counts_declared_objects(tmp_path, capsys):
    """The object count comes from the walk, not from the rendered text."""
    html = tmp_path / "2.0.html"
    html.write_text(
        '<div><h3><a href="#schema"></a>Schema</h3>'
        "<h4>Pet Object</h4><p>A pet.</p><h5>Fixed Fields</h5>"
        "<table><thead><tr><th>Field Name</th><th>Type</th><th>Description</th></tr></thead>"
        "<tbody><tr><td>kind</td><td>string</td><td>Written as class Pet(BaseModel): in docs.</td></tr>"
        "</tbody></table></div>",
        encoding="utf-8",
    )
    output = tmp_path / "schema.py"
    code = main(["--input", str(html), "--output", str(output), "--config", str(CONFIG_PATH)])
    assert code == 0
    assert output.read_text(encoding="utf-8").count("(BaseModel):") == 2
    assert "Generated 1 object(s) and 10 special type(s)" in capsys.readouterr().out
