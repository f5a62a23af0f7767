# Tests for agentsync.sync.teams
# Team folder discovery and team.yaml metadata

from pathlib import Path

from agentsync.sync.teams import TeamInfo, discover_teams, read_team_metadata


class TestDiscoverTeams:
    """Tests for discover_teams."""

    def test_missing_checkout(self, temp_dir: Path):
        assert discover_teams(temp_dir / "nope") == []

    def test_team_needs_skills_or_rules(self, make_registry, checkout: Path):
        make_registry(
            {
                "engineering/skills/review/SKILL.md": "x",
                "design/rules/ui.md": "x",
                "docs/README.md": "not a team",
            }
        )
        names = [t.folder_name for t in discover_teams(checkout)]
        assert names == ["design", "engineering"]

    def test_everyone_sorts_first(self, make_registry, checkout: Path):
        make_registry(
            {
                "zeta/skills/a/SKILL.md": "x",
                "alpha/rules/a.md": "x",
                "everyone/skills/a/SKILL.md": "x",
            }
        )
        names = [t.folder_name for t in discover_teams(checkout)]
        assert names == ["everyone", "alpha", "zeta"]

    def test_excludes_community_playground_and_hidden(self, make_registry, checkout: Path):
        make_registry(
            {
                "community-playground/skills/a/SKILL.md": "x",
                ".github/skills/a/SKILL.md": "x",
                "sales/skills/a/SKILL.md": "x",
            }
        )
        assert [t.folder_name for t in discover_teams(checkout)] == ["sales"]

    def test_playground_flag(self, make_registry, checkout: Path):
        make_registry(
            {
                "engineering/skills/a/SKILL.md": "x",
                "engineering/playground/skills/beta/SKILL.md": "x",
                "sales/skills/a/SKILL.md": "x",
            }
        )
        teams = {t.folder_name: t for t in discover_teams(checkout)}
        assert teams["engineering"].has_playground is True
        assert teams["sales"].has_playground is False

    def test_metadata_from_team_yaml(self, make_registry, checkout: Path):
        make_registry(
            {
                "engineering/skills/a/SKILL.md": "x",
                "engineering/team.yaml": 'name: "Platform Engineering"\ndescription: Build and ship\n',
            }
        )
        team = discover_teams(checkout)[0]
        assert team == TeamInfo(
            folder_name="engineering",
            display_name="Platform Engineering",
            description="Build and ship",
            has_playground=False,
        )


class TestReadTeamMetadata:
    """Tests for read_team_metadata fallbacks."""

    def test_no_file(self, temp_dir: Path):
        team_dir = temp_dir / "data-science"
        team_dir.mkdir()
        assert read_team_metadata(team_dir) == ("Data-Science", "")

    def test_malformed_yaml(self, write_tree, temp_dir: Path):
        write_tree(temp_dir, {"ops/team.yaml": "name: [unclosed\n"})
        assert read_team_metadata(temp_dir / "ops") == ("Ops", "")

    def test_not_a_mapping(self, write_tree, temp_dir: Path):
        write_tree(temp_dir, {"ops/team.yaml": "- just\n- a list\n"})
        assert read_team_metadata(temp_dir / "ops") == ("Ops", "")

    def test_nested_quotes_stripped(self, write_tree, temp_dir: Path):
        write_tree(temp_dir, {"ops/team.yaml": "name: '\"Ops Crew\"'\n"})
        assert read_team_metadata(temp_dir / "ops") == ("Ops Crew", "")

    def test_blank_name_falls_back(self, write_tree, temp_dir: Path):
        write_tree(temp_dir, {"ops/team.yaml": "name:\ndescription: On call\n"})
        assert read_team_metadata(temp_dir / "ops") == ("Ops", "On call")
