"""Tests for the property import workflow."""

from conftest import FakeHubSpotClient, make_row

from propsync.engine.importer import PropertyImporter
from propsync.models.sync import ItemStatus


class TestPropertyImporter:
    """Tests for PropertyImporter.run."""

    def test_creates_group_then_property_on_empty_portal(self, fake_client: FakeHubSpotClient) -> None:
        report = PropertyImporter(fake_client).run([make_row("score")])

        assert fake_client.calls == [
            ("list_groups",),
            ("create_group", "leadinfo"),
            ("get_property", "score"),
            ("create_property", "score"),
        ]
        assert report.succeeded == ["score"]
        assert report.results[0].status == ItemStatus.CREATED

    def test_payload_marks_text_fields_as_form_fields(self, fake_client: FakeHubSpotClient) -> None:
        PropertyImporter(fake_client).run([
            make_row("score"),
            make_row("notes", **{"Form field": "false"}),
        ])

        assert fake_client.properties["score"]["fieldType"] == "text"
        assert fake_client.properties["score"]["formField"] is True
        assert fake_client.properties["notes"]["fieldType"] == "textarea"
        assert fake_client.properties["notes"]["formField"] is False
        assert "options" not in fake_client.properties["score"]

    def test_second_run_updates_instead_of_creating(self, fake_client: FakeHubSpotClient) -> None:
        importer = PropertyImporter(fake_client)
        importer.run([make_row("score")])
        fake_client.calls.clear()

        report = importer.run([make_row("score")])

        assert fake_client.calls_named("create_group") == []
        assert fake_client.calls_named("create_property") == []
        assert fake_client.calls_named("update_property") == [("update_property", "score")]
        assert report.results[0].status == ItemStatus.UPDATED
        assert list(fake_client.properties) == ["score"]

    def test_skips_hubspot_defined_rows(self, fake_client: FakeHubSpotClient) -> None:
        report = PropertyImporter(fake_client).run([
            make_row("email", **{"Hubspot defined": "true"}),
            make_row("score"),
        ])

        assert ("get_property", "email") not in fake_client.calls
        assert [r.name for r in report.results] == ["score"]

    def test_group_check_precedes_each_mutation(self, fake_client: FakeHubSpotClient) -> None:
        PropertyImporter(fake_client).run([
            make_row("a", group="g1"),
            make_row("b", group="g2"),
        ])

        methods = [c[0] for c in fake_client.calls]
        assert methods == [
            "list_groups", "create_group", "get_property", "create_property",
            "list_groups", "create_group", "get_property", "create_property",
        ]

    def test_existing_group_is_not_recreated(self) -> None:
        client = FakeHubSpotClient(groups=["leadinfo"])

        PropertyImporter(client).run([make_row("score")])

        assert client.calls_named("create_group") == []

    def test_malformed_options_fail_only_that_row(self, fake_client: FakeHubSpotClient) -> None:
        report = PropertyImporter(fake_client).run([
            make_row("broken", Options="[{not json"),
            make_row("fine"),
        ])

        assert report.failed == ["broken"]
        assert report.succeeded == ["fine"]
        assert ("create_property", "broken") not in fake_client.calls

    def test_options_are_decoded_before_sending(self, fake_client: FakeHubSpotClient) -> None:
        options = '[{"label": "Yes", "value": "yes"}, {"label": "No", "value": "no"}]'

        PropertyImporter(fake_client).run([make_row("choice", Options=options)])

        assert fake_client.properties["choice"]["options"] == [
            {"label": "Yes", "value": "yes"},
            {"label": "No", "value": "no"},
        ]

    def test_group_failure_does_not_abort_property(self, fake_client: FakeHubSpotClient) -> None:
        fake_client.fail_on.add(("create_group", "leadinfo"))

        report = PropertyImporter(fake_client).run([make_row("score")])

        assert ("create_property", "score") in fake_client.calls
        assert report.succeeded == ["score"]

    def test_remote_failure_continues_with_next_row(self, fake_client: FakeHubSpotClient) -> None:
        fake_client.fail_on.add(("create_property", "a"))

        report = PropertyImporter(fake_client).run([make_row("a"), make_row("b")])

        assert report.failed == ["a"]
        assert report.succeeded == ["b"]

    def test_row_without_internal_name_fails(self, fake_client: FakeHubSpotClient) -> None:
        report = PropertyImporter(fake_client).run([make_row(""), make_row("b")])

        assert report.failed == ["<unnamed>"]
        assert report.succeeded == ["b"]
        assert fake_client.calls_named("get_property") == [("get_property", "b")]

    def test_duplicate_names_create_then_update(self, fake_client: FakeHubSpotClient) -> None:
        report = PropertyImporter(fake_client).run([make_row("score"), make_row("score")])

        assert [r.status for r in report.results] == [ItemStatus.CREATED, ItemStatus.UPDATED]

    def test_empty_input_is_a_no_op(self, fake_client: FakeHubSpotClient) -> None:
        report = PropertyImporter(fake_client).run([])

        assert fake_client.calls == []
        assert report.results == []
        assert report.completed_at is not None
