import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class CampaignPlan(models.Model):
    class Meta:
        app_label = 'planner'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'created_at'], name='planner_plan_user_created_idx'),
        ]

    STATUS_CHOICES = [
        ('draft', 'Draft'),
        ('active', 'Active'),
        ('completed', 'Completed'),
        ('archived', 'Archived'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='campaign_plans')
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    start_date = models.DateField()
    end_date = models.DateField()
    total_days = models.PositiveIntegerField()

    target_revenue = models.DecimalField(max_digits=14, decimal_places=2)
    target_aov = models.DecimalField(max_digits=12, decimal_places=2)
    target_conversion_rate = models.DecimalField(max_digits=5, decimal_places=2)
    cost_per_click = models.DecimalField(max_digits=10, decimal_places=2)

    total_budget = models.DecimalField(max_digits=14, decimal_places=2)
    total_traffic = models.PositiveIntegerField()
    total_orders = models.PositiveIntegerField()

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='draft')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def clean(self):
        if self.end_date < self.start_date:
            raise ValidationError("end_date must not be before start_date")

    def __str__(self):
        return f"{self.name} ({self.start_date} - {self.end_date})"


class CampaignPeriod(models.Model):
    class Meta:
        app_label = 'planner'
        ordering = ['order_index']
        constraints = [
            models.UniqueConstraint(
                fields=['campaign', 'order_index'],
                name='unique_period_order_per_campaign'
            )
        ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    campaign = models.ForeignKey(CampaignPlan, on_delete=models.CASCADE, related_name='periods')
    name = models.CharField(max_length=50)
    display_name = models.CharField(max_length=100)
    order_index = models.PositiveIntegerField()
    start_date = models.DateField()
    end_date = models.DateField()
    duration_days = models.PositiveIntegerField()

    budget_amount = models.DecimalField(max_digits=14, decimal_places=2)
    budget_percentage = models.DecimalField(max_digits=6, decimal_places=2)
    daily_budget = models.DecimalField(max_digits=14, decimal_places=2)
    traffic_amount = models.PositiveIntegerField()
    traffic_percentage = models.DecimalField(max_digits=6, decimal_places=2)
    daily_traffic = models.PositiveIntegerField()
    expected_orders = models.PositiveIntegerField()
    expected_revenue = models.DecimalField(max_digits=14, decimal_places=2)

    def __str__(self):
        return f"{self.display_name} ({self.start_date} - {self.end_date})"


class DailyBudget(models.Model):
    class Meta:
        app_label = 'planner'
        ordering = ['date']
        constraints = [
            models.UniqueConstraint(
                fields=['campaign', 'date'],
                name='unique_daily_budget_per_campaign_date'
            )
        ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    campaign = models.ForeignKey(CampaignPlan, on_delete=models.CASCADE, related_name='daily_budgets')
    period = models.ForeignKey(CampaignPeriod, on_delete=models.CASCADE, related_name='daily_budgets')
    date = models.DateField()
    day_of_campaign = models.PositiveIntegerField()
    budget = models.DecimalField(max_digits=14, decimal_places=2)
    traffic = models.PositiveIntegerField()
    expected_orders = models.PositiveIntegerField()
    expected_revenue = models.DecimalField(max_digits=14, decimal_places=2)

    def clean(self):
        if not self.period.start_date <= self.date <= self.period.end_date:
            raise ValidationError("date must fall within the owning period")
