from dataclasses import asdict
from decimal import Decimal

from rest_framework import serializers

from .models import CampaignPeriod, CampaignPlan, DailyBudget
from .totals import CampaignInputs


class CampaignInputsSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    target_revenue = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    target_aov = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    target_conversion_rate = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal('0.01'), max_value=Decimal('100')
    )
    cost_per_click = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Campaign name cannot be blank.")
        return value.strip()

    def validate(self, data):
        if data['end_date'] < data['start_date']:
            raise serializers.ValidationError({'end_date': "end_date must not be before start_date."})
        return data

    def to_inputs(self):
        return CampaignInputs(**self.validated_data)


class CampaignPlanSerializer(serializers.ModelSerializer):
    user = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = CampaignPlan
        fields = '__all__'


class CampaignPeriodSerializer(serializers.ModelSerializer):
    class Meta:
        model = CampaignPeriod
        exclude = ('campaign',)


class DailyBudgetSerializer(serializers.ModelSerializer):
    class Meta:
        model = DailyBudget
        exclude = ('campaign',)


class PeriodDraftSerializer(serializers.Serializer):
    name = serializers.CharField()
    label = serializers.CharField()
    order_index = serializers.IntegerField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    duration_days = serializers.IntegerField()
    budget_amount = serializers.IntegerField()
    budget_percentage = serializers.DecimalField(max_digits=6, decimal_places=2)
    traffic_amount = serializers.IntegerField()
    traffic_percentage = serializers.DecimalField(max_digits=6, decimal_places=2)
    daily_budget = serializers.IntegerField()
    daily_traffic = serializers.IntegerField()
    expected_orders = serializers.IntegerField()
    expected_revenue = serializers.IntegerField()


class DailyBudgetDraftSerializer(serializers.Serializer):
    period_index = serializers.IntegerField()
    date = serializers.DateField()
    day_of_campaign = serializers.IntegerField()
    budget = serializers.IntegerField()
    traffic = serializers.IntegerField()
    expected_orders = serializers.IntegerField()
    expected_revenue = serializers.IntegerField()


def funnel_payload(funnel_allocations):
    return {name: allocation.as_dict() for name, allocation in funnel_allocations.items()}


def summary_payload(summary):
    return asdict(summary)
