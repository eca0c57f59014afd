"""Tests for warren.routes.naming — route and import names."""

from __future__ import annotations

import pytest

from warren.routes.naming import collation_key, import_name, pascal_case, path_to_name


class TestPascalCase:
    """pascal_case() — kebab/snake to PascalCase."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("about", "About"),
            ("user-center", "UserCenter"),
            ("edit_profile", "EditProfile"),
            ("404", "404"),
            ("wip", "Wip"),
            ("Already", "Already"),
        ],
    )
    def test_conversion(self, value: str, expected: str) -> None:
        assert pascal_case(value) == expected


class TestImportName:
    """import_name() — identifiers safe for generated imports."""

    def test_numeric_name_prefixed(self) -> None:
        assert import_name("404") == "_404"

    def test_regular_name(self) -> None:
        assert import_name("user-center") == "UserCenter"

    def test_alphanumeric_not_prefixed(self) -> None:
        assert import_name("Error404") == "Error404"


class TestPathToName:
    """path_to_name() — names are a pure function of the route path."""

    @pytest.mark.parametrize(
        ("route_path", "expected"),
        [
            ("/about", "About"),
            ("/about/detail/:id", "AboutDetailId"),
            ("/list/:id?", "ListId"),
            ("/list/edit/:id/:userId", "ListEditIdUserId"),
            ("/user-center/profile", "UserCenterProfile"),
            ("/docs/*", "DocsSplats"),
            ("/*", "Splats"),
            ("/", "Root"),
        ],
    )
    def test_default_names(self, route_path: str, expected: str) -> None:
        assert path_to_name(route_path) == expected

    def test_custom_splats_alias(self) -> None:
        assert path_to_name("/docs/*", "CatchAll") == "DocsCatchAll"

    def test_required_and_optional_collide(self) -> None:
        """Param markers are stripped, so /a/:id and /a/:id? share a name."""
        assert path_to_name("/a/:id") == path_to_name("/a/:id?")

    def test_deterministic(self) -> None:
        assert path_to_name("/x/:y") == path_to_name("/x/:y")


# ---------------------------------------------------------------------------
# collation_key
# ---------------------------------------------------------------------------


class TestCollationKey:
    """Root-locale style ordering, independent of the host locale."""

    def _sorted(self, names: list[str]) -> list[str]:
        return sorted(names, key=collation_key)

    def test_case_ignored_at_first_level(self) -> None:
        assert self._sorted(["UserList", "Userinfo"]) == ["Userinfo", "UserList"]
        assert self._sorted(["Zeta", "alpha", "Beta"]) == ["alpha", "Beta", "Zeta"]

    def test_lowercase_before_uppercase(self) -> None:
        assert self._sorted(["ABOUT", "About", "about"]) == ["about", "About", "ABOUT"]

    def test_accents_after_base_letters(self) -> None:
        assert self._sorted(["Resume", "Résumé", "Resumes"]) == ["Resume", "Résumé", "Resumes"]

    def test_punctuation_before_digits_before_letters(self) -> None:
        assert self._sorted(["Page1", "Pagea", "Page-a"]) == [
            "Page-a", "Page1", "Pagea",
        ]

    def test_total_order(self) -> None:
        assert collation_key("About") != collation_key("about")
        assert collation_key("About") == collation_key("About")
