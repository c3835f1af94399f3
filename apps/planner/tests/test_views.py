from unittest.mock import MagicMock, patch

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.planner.exceptions import StoreFailure
from apps.planner.models import CampaignPeriod, CampaignPlan, DailyBudget
from apps.planner.services import PlanService
from .factories import request_payload

User = get_user_model()


class PlannerAPITestCase(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username='testuser', email='test@example.com', password='testpass123')
        self.client.force_authenticate(user=self.user)

    def create_plan(self, **kwargs):
        return self.client.post(reverse('planner-plans'), request_payload(**kwargs), format='json')


class CreatePlanTest(PlannerAPITestCase):
    def test_create_plan(self):
        response = self.create_plan(days=7)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data['periods']), 3)
        self.assertEqual(len(response.data['daily_budgets']), 7)
        self.assertEqual(response.data['summary']['total_budget'], 250_000)
        self.assertEqual(response.data['summary']['avg_daily_budget'], 35_715)
        self.assertEqual(set(response.data['funnel_allocation']), {'launch', 'main', 'final'})
        self.assertEqual(response.data['campaign']['status'], 'draft')
        self.assertEqual(response.data['campaign']['user'], self.user.id)

        self.assertEqual(CampaignPlan.objects.filter(user=self.user).count(), 1)
        self.assertEqual(DailyBudget.objects.count(), 7)

    def test_campaign_too_long_for_medium_and_too_short_for_long_term(self):
        response = self.create_plan(days=10)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['constraint'], 'main')
        self.assertEqual(CampaignPlan.objects.count(), 0)

    def test_rejects_zero_conversion_rate(self):
        response = self.create_plan(target_conversion_rate='0')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('target_conversion_rate', response.data)

    def test_rejects_end_before_start(self):
        payload = request_payload()
        payload['end_date'] = '2025-02-27'

        response = self.client.post(reverse('planner-plans'), payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('end_date', response.data)

    def test_plan_too_large_to_store(self):
        oversized = {
            'target_revenue': '999999999999',
            'target_aov': '1',
            'target_conversion_rate': '0.01',
            'cost_per_click': '99999999',
        }

        preview = self.client.post(reverse('planner-preview'), request_payload(**oversized), format='json')
        self.assertEqual(preview.status_code, status.HTTP_200_OK)

        response = self.create_plan(**oversized)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['constraint'], 'total_budget')
        self.assertEqual(CampaignPlan.objects.count(), 0)

    def test_accepts_sub_unit_order_value(self):
        response = self.create_plan(target_revenue='1000', target_aov='0.50')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['summary']['total_orders'], 2_000)

    def test_repurchase_segment_key(self):
        response = self.create_plan(days=20)

        breakdown = response.data['funnel_allocation']['repurchase']['conversion']['breakdown']
        self.assertEqual(list(breakdown), ['repurchase_remarketing'])

    def test_store_failure_returns_server_error(self):
        store = MagicMock()
        store.create_campaign.side_effect = StoreFailure('connection refused')

        with patch('apps.planner.views.get_plan_service', return_value=PlanService(store)):
            response = self.create_plan(days=7)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'Campaign plan could not be saved')

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)

        response = self.create_plan(days=7)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_jwt_access_token(self):
        self.client.force_authenticate(user=None)
        token = self.client.post(
            reverse('token_obtain_pair'), {'username': 'testuser', 'password': 'testpass123'}, format='json'
        )
        self.assertEqual(token.status_code, status.HTTP_200_OK)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.data['access']}")
        response = self.create_plan(days=3)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)


class PlanReadTest(PlannerAPITestCase):
    def setUp(self):
        super().setUp()
        self.campaign_id = self.create_plan(days=20).data['campaign']['id']

    def test_list_plans(self):
        self.create_plan(days=2, name='Flash Sale')

        response = self.client.get(reverse('planner-plans'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_plans'], 2)
        self.assertEqual({p['name'] for p in response.data['plans']}, {'Spring Sale', 'Flash Sale'})

    def test_plan_detail(self):
        response = self.client.get(reverse('planner-plan-detail', args=[self.campaign_id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [p['name'] for p in response.data['periods']],
            ['preheat', 'launch', 'main', 'final', 'repurchase'],
        )
        self.assertEqual(len(response.data['daily_budgets']), 20)
        funnel = response.data['funnel_allocation']
        self.assertEqual(funnel['repurchase']['conversion']['budget'], 5_000)
        self.assertEqual(funnel['main']['conversion']['budget'], 76_000)

    def test_other_users_cannot_see_the_plan(self):
        other = User.objects.create_user(username='other', email='other@example.com', password='testpass123')
        self.client.force_authenticate(user=other)

        response = self.client.get(reverse('planner-plan-detail', args=[self.campaign_id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.delete(reverse('planner-plan-detail', args=[self.campaign_id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(CampaignPlan.objects.filter(id=self.campaign_id).exists())

    def test_delete_plan(self):
        url = reverse('planner-plan-detail', args=[self.campaign_id])

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(CampaignPeriod.objects.count(), 0)

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class PreviewTest(PlannerAPITestCase):
    def test_preview_does_not_save(self):
        response = self.client.post(reverse('planner-preview'), request_payload(days=45), format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['strategy'], 'long_term')
        self.assertEqual([p['duration_days'] for p in response.data['periods']], [4, 3, 28, 3, 7])
        self.assertEqual(len(response.data['daily_budgets']), 45)
        self.assertEqual(CampaignPlan.objects.count(), 0)

    def test_preview_reports_degenerate_durations(self):
        response = self.client.post(reverse('planner-preview'), request_payload(days=12), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['constraint'], 'main')


class HealthTest(APITestCase):
    def test_health_is_public(self):
        response = self.client.get(reverse('planner-health'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'healthy')
