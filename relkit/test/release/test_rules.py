from __future__ import annotations

from relkit.release.rules import download_url_rule, version_comment_rule

URL = "https://github.com/acme/docs/releases/download"


class TestVersionComment:
    def test_rewrites_first_comment_only(self) -> None:
        rule = version_comment_rule()
        content = "# Version: 0.0.3\nStylesPath = styles\n# Version: 0.0.1\n"

        updated, matches = rule.apply(content, "0.0.4")

        assert matches == 1
        assert updated == "# Version: 0.0.4\nStylesPath = styles\n# Version: 0.0.1\n"

    def test_normalizes_spacing(self) -> None:
        updated, _ = version_comment_rule().apply("#Version:   1.0.0\n", "1.0.1")
        assert updated == "# Version: 1.0.1\n"

    def test_matches_previous_test_version(self) -> None:
        updated, matches = version_comment_rule().apply("# Version: 1.2.3-test\n", "1.2.4")
        assert matches == 1
        assert updated == "# Version: 1.2.4\n"

    def test_no_match(self) -> None:
        content = "StylesPath = styles\n"
        assert version_comment_rule().apply(content, "1.0.0") == (content, 0)

    def test_idempotent(self) -> None:
        rule = version_comment_rule()
        once, _ = rule.apply("# Version: 0.0.3\n", "0.0.4")
        twice, matches = rule.apply(once, "0.0.4")
        assert twice == once
        assert matches == 1

    def test_extract(self) -> None:
        rule = version_comment_rule()
        assert rule.extract("x\n# Version: 2.1.0\n") == "2.1.0"
        assert rule.extract("no version here") is None


class TestDownloadUrl:
    def test_rewrites_every_link_to_the_artifact(self) -> None:
        rule = download_url_rule(repo="acme/docs", artifact_name="DNB")
        content = f"a {URL}/v0.0.3/DNB.zip\nb {URL}/v0.0.2/DNB.zip\n"

        updated, matches = rule.apply(content, "0.0.4")

        assert matches == 2
        assert updated == f"a {URL}/v0.0.4/DNB.zip\nb {URL}/v0.0.4/DNB.zip\n"

    def test_leaves_other_artifacts_and_repos_alone(self) -> None:
        rule = download_url_rule(repo="acme/docs", artifact_name="DNB")
        other_artifact = f"{URL}/v0.0.3/Other.zip"
        other_repo = "https://github.com/else/docs/releases/download/v0.0.3/DNB.zip"
        content = f"{other_artifact}\n{other_repo}\n"

        assert rule.apply(content, "0.0.4") == (content, 0)

    def test_artifact_name_is_literal(self) -> None:
        rule = download_url_rule(repo="acme/docs", artifact_name="D.B")
        content = f"{URL}/v1.0.0/DxB.zip"
        assert rule.apply(content, "1.0.1") == (content, 0)

    def test_extract(self) -> None:
        rule = download_url_rule(repo="acme/docs", artifact_name="DNB")
        assert rule.extract(f"see {URL}/v3.1.4/DNB.zip") == "3.1.4"
