"""Management command — print a creator's ranked feed."""
from django.core.management.base import BaseCommand, CommandError

from apps.core.exceptions import NotFoundError
from apps.matching.engine import build_feed
from apps.matching.ranking import RankingMode


class Command(BaseCommand):
    help = "Print the ranked open roles for a creator."

    def add_arguments(self, parser):
        parser.add_argument("creator_id", type=str, help="CreatorProfile id")
        parser.add_argument(
            "--mode",
            choices=[m.value for m in RankingMode],
            default=None,
            help="Ranking mode (default: priority for members, deterministic otherwise)",
        )
        parser.add_argument(
            "--limit",
            type=int,
            default=20,
            help="Max rows to print (default: 20)",
        )

    def handle(self, *args, **options):
        try:
            results = build_feed(
                options["creator_id"], mode=options["mode"], limit=options["limit"]
            )
        except NotFoundError as exc:
            raise CommandError(str(exc)) from exc

        if not results:
            self.stdout.write(self.style.WARNING("No open roles for this creator."))
            return

        for pos, r in enumerate(results, start=1):
            flags = []
            if r.is_priority_match:
                flags.append("priority")
            if r.is_great_match:
                flags.append("great match")
            distance = f"{r.distance_km} km" if r.distance_km is not None else "?"
            location = r.opportunity.city or ("remote" if r.opportunity.is_remote else "-")
            self.stdout.write(
                f"{pos:>3}. [{r.score:>3}] {r.role.title} — {r.opportunity.title[:60]}"
                f" ({location}, {distance})"
                + (f" [{', '.join(flags)}]" if flags else "")
            )
            self.stdout.write(f"       {r.reason}")
