"""Management command tests."""
from io import StringIO

import pytest
from django.core.management import CommandError, call_command


@pytest.mark.django_db
class TestCreatorFeedCommand:
    def test_prints_ranked_roles(self, creator_profile, photo_role):
        out = StringIO()
        call_command("creator_feed", str(creator_profile.pk), stdout=out)

        output = out.getvalue()
        assert "Lead Photographer" in output
        assert "[100]" in output
        assert "Same city" in output

    def test_empty_feed(self, creator_profile):
        out = StringIO()
        call_command("creator_feed", str(creator_profile.pk), stdout=out)
        assert "No open roles" in out.getvalue()

    def test_unknown_creator(self, db):
        with pytest.raises(CommandError):
            call_command("creator_feed", "00000000-0000-0000-0000-000000000000")
