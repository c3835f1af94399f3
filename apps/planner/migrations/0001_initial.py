import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='CampaignPlan',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('total_days', models.PositiveIntegerField()),
                ('target_revenue', models.DecimalField(decimal_places=2, max_digits=14)),
                ('target_aov', models.DecimalField(decimal_places=2, max_digits=12)),
                ('target_conversion_rate', models.DecimalField(decimal_places=2, max_digits=5)),
                ('cost_per_click', models.DecimalField(decimal_places=2, max_digits=10)),
                ('total_budget', models.DecimalField(decimal_places=2, max_digits=14)),
                ('total_traffic', models.PositiveIntegerField()),
                ('total_orders', models.PositiveIntegerField()),
                ('status', models.CharField(choices=[('draft', 'Draft'), ('active', 'Active'), ('completed', 'Completed'), ('archived', 'Archived')], default='draft', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='campaign_plans', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user', 'created_at'], name='planner_plan_user_created_idx')],
            },
        ),
        migrations.CreateModel(
            name='CampaignPeriod',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=50)),
                ('display_name', models.CharField(max_length=100)),
                ('order_index', models.PositiveIntegerField()),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('duration_days', models.PositiveIntegerField()),
                ('budget_amount', models.DecimalField(decimal_places=2, max_digits=14)),
                ('budget_percentage', models.DecimalField(decimal_places=2, max_digits=6)),
                ('daily_budget', models.DecimalField(decimal_places=2, max_digits=14)),
                ('traffic_amount', models.PositiveIntegerField()),
                ('traffic_percentage', models.DecimalField(decimal_places=2, max_digits=6)),
                ('daily_traffic', models.PositiveIntegerField()),
                ('expected_orders', models.PositiveIntegerField()),
                ('expected_revenue', models.DecimalField(decimal_places=2, max_digits=14)),
                ('campaign', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='periods', to='planner.campaignplan')),
            ],
            options={
                'ordering': ['order_index'],
                'constraints': [models.UniqueConstraint(fields=('campaign', 'order_index'), name='unique_period_order_per_campaign')],
            },
        ),
        migrations.CreateModel(
            name='DailyBudget',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('day_of_campaign', models.PositiveIntegerField()),
                ('budget', models.DecimalField(decimal_places=2, max_digits=14)),
                ('traffic', models.PositiveIntegerField()),
                ('expected_orders', models.PositiveIntegerField()),
                ('expected_revenue', models.DecimalField(decimal_places=2, max_digits=14)),
                ('campaign', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='daily_budgets', to='planner.campaignplan')),
                ('period', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='daily_budgets', to='planner.campaignperiod')),
            ],
            options={
                'ordering': ['date'],
                'constraints': [models.UniqueConstraint(fields=('campaign', 'date'), name='unique_daily_budget_per_campaign_date')],
            },
        ),
    ]
