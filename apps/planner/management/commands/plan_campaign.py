from datetime import date

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from apps.planner.engine import allocate
from apps.planner.exceptions import PlannerError
from apps.planner.services import PlanService
from apps.planner.store import DjangoPlanStore
from apps.planner.totals import CampaignInputs

User = get_user_model()


class Command(BaseCommand):
    help = 'Compute a campaign budget plan, optionally saving it for a user'

    def add_arguments(self, parser):
        parser.add_argument('--name', type=str, required=True)
        parser.add_argument('--start', type=date.fromisoformat, required=True)
        parser.add_argument('--end', type=date.fromisoformat, required=True)
        parser.add_argument('--revenue', type=str, required=True)
        parser.add_argument('--aov', type=str, required=True)
        parser.add_argument('--conversion-rate', type=str, required=True)
        parser.add_argument('--cpc', type=str, required=True)
        parser.add_argument('--user-email', type=str, help='Save the plan for this user')

    def handle(self, *args, **options):
        try:
            inputs = CampaignInputs(
                name=options['name'],
                start_date=options['start'],
                end_date=options['end'],
                target_revenue=options['revenue'],
                target_aov=options['aov'],
                target_conversion_rate=options['conversion_rate'],
                cost_per_click=options['cpc'],
            )
            if options['user_email']:
                user = User.objects.filter(email=options['user_email']).first()
                if user is None:
                    raise CommandError(f"User with email {options['user_email']} does not exist")
                created = PlanService(DjangoPlanStore()).create_plan(user.id, inputs)
                summary, periods = created.summary, created.periods
                self.stdout.write(self.style.SUCCESS(f'Saved plan {created.campaign.id}'))
            else:
                result = allocate(inputs)
                summary, periods = result.summary, result.periods
        except PlannerError as e:
            raise CommandError(str(e)) from e

        self.stdout.write(
            f'Budget {summary.total_budget} | traffic {summary.total_traffic} | '
            f'orders {summary.total_orders} | {summary.total_days} days '
            f'(avg {summary.avg_daily_budget}/day)'
        )
        for period in periods:
            label = getattr(period, 'label', None) or period.display_name
            self.stdout.write(
                f'  {period.order_index + 1}. {label} [{period.name}] '
                f'{period.start_date} - {period.end_date} ({period.duration_days}d): '
                f'budget {period.budget_amount} ({period.budget_percentage}%), '
                f'{period.daily_budget}/day'
            )
