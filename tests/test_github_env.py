import pytest

from orydevkit.github_env import render_env


def test_tag_ref():
    out = render_env("refs/tags/v1.0.0", "ory/kratos", "", None)
    assert out.startswith("export GIT_TAG=v1.0.0")
    assert "GIT_BRANCH" not in out


def test_branch_ref():
    out = render_env("refs/heads/feature", "ory/kratos", "", None)
    assert out.startswith("export GIT_BRANCH=feature")


def test_fallback_uses_current_branch():
    out = render_env("", "ory/kratos", "", "  develop\n")
    assert out.startswith("export GIT_BRANCH=develop")


def test_repository_split():
    out = render_env("refs/heads/main", "ory/kratos", "", None)
    assert "export GITHUB_ORG=ory\n" in out
    assert "export GITHUB_REPO=kratos\n" in out


def test_swagger_app_name_is_title_cased():
    out = render_env("refs/heads/main", "ORY/kratos", "", None)
    assert "export SWAGGER_APP_NAME=Ory_Kratos\n" in out


def test_ignore_pkgs():
    out = render_env("refs/heads/main", "ory/kratos", "a,b", None)
    assert out.endswith("export SWAGGER_SPEC_IGNORE_PKGS='-x a -x b'")


def test_malformed_repository():
    with pytest.raises(ValueError):
        render_env("refs/heads/main", "kratos", "", None)