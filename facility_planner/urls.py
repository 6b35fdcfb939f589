from django.contrib import admin
from django.urls import path

from facility_planner.apps.core.views import healthz
from facility_planner.apps.estimates.views import EquipmentQuoteView, ProjectionView
from facility_planner.apps.leads.views import (
    LeadSubmitView,
    RetryLeadSyncView,
    WizardSubmissionDetailView,
)
from facility_planner.apps.maintenance.views import (
    AssetCatalogView,
    EmailPlanView,
    GeneratePlanView,
    SavePlanView,
)
from facility_planner.apps.pricing.views import LivePriceView, SyncPricingView
from facility_planner.apps.wizards.views import (
    BusinessPlanDraftView,
    ProjectCreateView,
    ProjectStateView,
    ProjectUpgradeView,
)

urlpatterns = [
    ###
    # Health check and admin
    ###
    # Health check for the hosting platform
    path("healthz", healthz, name="healthz"),
    path("admin/", admin.site.urls),
    ###
    # Maintenance plans
    ###
    path("api/maintenance/assets/", AssetCatalogView.as_view(), name="maintenance-assets"),
    path("api/maintenance/generate/", GeneratePlanView.as_view(), name="maintenance-generate"),
    path("api/maintenance/plans/", SavePlanView.as_view(), name="maintenance-plan-save"),
    path("api/maintenance/email/", EmailPlanView.as_view(), name="maintenance-plan-email"),
    ###
    # Leads and wizard reports
    ###
    path("api/leads/", LeadSubmitView.as_view(), name="lead-submit"),
    # Staff only: re-run the Google Sheets sync for one lead
    path(
        "api/leads/<int:pk>/retry-sync/",
        RetryLeadSyncView.as_view(),
        name="lead-retry-sync",
    ),
    path(
        "api/reports/<uuid:pk>/",
        WizardSubmissionDetailView.as_view(),
        name="wizard-submission-detail",
    ),
    ###
    # Pricing and estimates
    ###
    path("api/pricing/prices/", LivePriceView.as_view(), name="pricing-prices"),
    # Staff only: scrape vendor pages now
    path("api/pricing/sync/", SyncPricingView.as_view(), name="pricing-sync"),
    path(
        "api/estimates/equipment-quote/",
        EquipmentQuoteView.as_view(),
        name="estimates-equipment-quote",
    ),
    path("api/estimates/projection/", ProjectionView.as_view(), name="estimates-projection"),
    ###
    # Wizard progress
    ###
    path("api/projects/", ProjectCreateView.as_view(), name="project-create"),
    path("api/projects/<str:project_id>/", ProjectStateView.as_view(), name="project-state"),
    path(
        "api/projects/<str:project_id>/upgrade/",
        ProjectUpgradeView.as_view(),
        name="project-upgrade",
    ),
    path("api/business-plan/drafts/", BusinessPlanDraftView.as_view(), name="business-plan-drafts"),
]
