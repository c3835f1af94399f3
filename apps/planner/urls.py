from django.urls import path

from . import views

urlpatterns = [
    path('plans/', views.plans, name='planner-plans'),
    path('plans/<uuid:campaign_id>/', views.plan_detail, name='planner-plan-detail'),
    path('preview/', views.preview, name='planner-preview'),
    path('health/', views.health, name='planner-health'),
]
