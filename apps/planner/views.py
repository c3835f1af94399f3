import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from .engine import allocate
from .exceptions import DegenerateAllocation, InvalidInput, StoreFailure
from .serializers import (
    CampaignInputsSerializer,
    CampaignPeriodSerializer,
    CampaignPlanSerializer,
    DailyBudgetDraftSerializer,
    DailyBudgetSerializer,
    PeriodDraftSerializer,
    funnel_payload,
    summary_payload,
)
from .services import PlanService
from .store import DjangoPlanStore

logger = logging.getLogger(__name__)


def get_plan_service():
    return PlanService(DjangoPlanStore())


def planner_error_response(error):
    if isinstance(error, InvalidInput):
        return Response({
            'error': 'Invalid campaign input',
            'constraint': error.field,
            'detail': error.message,
        }, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(error, DegenerateAllocation):
        return Response({
            'error': 'Campaign duration cannot be split into periods',
            'constraint': error.period_name,
            'detail': error.message,
        }, status=status.HTTP_400_BAD_REQUEST)
    logger.error(f"Plan store error: {error}")
    return Response({'error': 'Campaign plan could not be saved'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def plans(request):
    """List the caller's plans, or allocate and save a new one"""
    service = get_plan_service()

    if request.method == 'GET':
        try:
            user_plans = service.list_plans(request.user.id)
        except StoreFailure as e:
            return planner_error_response(e)
        return Response({
            'plans': CampaignPlanSerializer(user_plans, many=True).data,
            'total_plans': len(user_plans),
        })

    serializer = CampaignInputsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        created = service.create_plan(request.user.id, serializer.to_inputs())
    except (InvalidInput, DegenerateAllocation, StoreFailure) as e:
        return planner_error_response(e)

    return Response({
        'campaign': CampaignPlanSerializer(created.campaign).data,
        'periods': CampaignPeriodSerializer(created.periods, many=True).data,
        'daily_budgets': DailyBudgetSerializer(created.daily_budgets, many=True).data,
        'funnel_allocation': funnel_payload(created.funnel_allocations),
        'summary': summary_payload(created.summary),
    }, status=status.HTTP_201_CREATED)


@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def plan_detail(request, campaign_id):
    service = get_plan_service()

    if request.method == 'DELETE':
        try:
            deleted = service.delete_plan(campaign_id, request.user.id)
        except StoreFailure as e:
            return planner_error_response(e)
        if not deleted:
            return Response({'error': 'Campaign plan not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    try:
        stored = service.get_plan(campaign_id, request.user.id)
    except StoreFailure as e:
        return planner_error_response(e)
    if stored is None:
        return Response({'error': 'Campaign plan not found'}, status=status.HTTP_404_NOT_FOUND)

    return Response({
        'campaign': CampaignPlanSerializer(stored.campaign).data,
        'periods': CampaignPeriodSerializer(stored.periods, many=True).data,
        'daily_budgets': DailyBudgetSerializer(stored.daily_budgets, many=True).data,
        'funnel_allocation': funnel_payload(PlanService.funnel_for(stored)),
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def preview(request):
    """Allocate without saving"""
    serializer = CampaignInputsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        result = allocate(serializer.to_inputs())
    except (InvalidInput, DegenerateAllocation) as e:
        return planner_error_response(e)

    return Response({
        'strategy': result.strategy.value,
        'periods': PeriodDraftSerializer(result.periods, many=True).data,
        'daily_budgets': DailyBudgetDraftSerializer(result.daily_budgets, many=True).data,
        'funnel_allocation': funnel_payload(result.funnel_allocations),
        'summary': summary_payload(result.summary),
    })


@api_view(['GET'])
@permission_classes([AllowAny])
def health(request):
    return Response({
        'status': 'healthy',
        'service': 'campaign-planner',
        'timestamp': timezone.now().isoformat(),
    })
