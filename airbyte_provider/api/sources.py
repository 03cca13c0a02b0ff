# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Source resource kinds supported by the provider.

Each source kind has a configuration model mirroring the connector's settings, a top-level
resource model, and a `ResourceDescriptor` binding both to the `/v1/sources` endpoint.

Only the configuration fields listed here are sent to the API. Optional numeric and boolean
fields are omitted from requests when unset.
"""

from __future__ import annotations

from typing import ClassVar

from airbyte_provider import constants
from airbyte_provider.api.resources import (
    ApiModel,
    ResourceDescriptor,
    ResourceModel,
    UpdateCapability,
    api_field,
)


class SourceResource(ResourceModel):
    """Fields shared by every source resource."""

    id_field: ClassVar[str] = "source_id"

    name: str = api_field("Name")
    source_id: str | None = api_field("Source ID", alias="sourceId", default=None, computed=True)
    workspace_id: str = api_field("Workspace ID", alias="workspaceId")


# Amplitude


class SourceAmplitudeConfiguration(ApiModel):
    source_type: str = api_field("Source Type", alias="sourceType", default="amplitude")
    start_date: str = api_field("Start Date")
    data_region: str = api_field("Data Region", default="Standard Server")
    request_time_range: int | None = api_field("Request Time Range", default=None)
    api_key: str = api_field("Api Key", sensitive=True)
    secret_key: str = api_field("Secret Key", sensitive=True)


class SourceAmplitude(SourceResource):
    configuration: SourceAmplitudeConfiguration = api_field(
        "Connection configuration",
        default_factory=SourceAmplitudeConfiguration,
    )


# Facebook Marketing


class SourceFacebookMarketingConfiguration(ApiModel):
    source_type: str = api_field("Source Type", alias="sourceType", default="facebook-marketing")
    account_id: str = api_field("Account ID")
    start_date: str = api_field("Start Date")
    access_token: str = api_field("Access Token", sensitive=True)
    end_date: str | None = api_field("End Date", default=None)
    include_deleted: bool | None = api_field("Include Deleted", default=None)
    fetch_thumbnail_images: bool | None = api_field("Fetch Thumbnail Images", default=None)
    page_size: int | None = api_field("Page Size", default=None)
    insights_lookback_window: int | None = api_field("Insights Lookback Window", default=None)
    max_batch_size: int | None = api_field("Max Batch Size", default=None)
    action_breakdowns_allow_empty: bool | None = api_field(
        "Action Breakdowns Allow Empty",
        default=None,
    )


class SourceFacebookMarketing(SourceResource):
    configuration: SourceFacebookMarketingConfiguration = api_field(
        "Connection configuration",
        default_factory=SourceFacebookMarketingConfiguration,
    )


# Freshdesk


class SourceFreshdeskConfiguration(ApiModel):
    source_type: str = api_field("Source Type", alias="sourceType", default="freshdesk")
    start_date: str = api_field("Start Date")
    domain: str = api_field("Domain")
    api_key: str = api_field("Api Key", sensitive=True)
    requests_per_minute: int | None = api_field("Requests Per Minute", default=None)


class SourceFreshdesk(SourceResource):
    configuration: SourceFreshdeskConfiguration = api_field(
        "Connection configuration",
        default_factory=SourceFreshdeskConfiguration,
    )


# Google Analytics (Universal Analytics)


class GoogleAnalyticsV4Credentials(ApiModel):
    auth_type: str = api_field("Auth Type", default="Service")
    credentials_json: str = api_field("Credentials JSON", sensitive=True)


class SourceGoogleAnalyticsV4Configuration(ApiModel):
    source_type: str = api_field(
        "Source Type",
        alias="sourceType",
        default="google-analytics-v4",
    )
    start_date: str = api_field("Start Date")
    view_id: str | None = api_field("View ID", default=None)
    custom_reports: str = api_field("Custom Reports")
    window_in_days: int | None = api_field("Window In Days", default=None)
    credentials: GoogleAnalyticsV4Credentials = api_field(
        "Credentials",
        default_factory=GoogleAnalyticsV4Credentials,
    )


class SourceGoogleAnalyticsV4(SourceResource):
    configuration: SourceGoogleAnalyticsV4Configuration = api_field(
        "Connection configuration",
        default_factory=SourceGoogleAnalyticsV4Configuration,
    )


# Google Sheets


class GoogleSheetsCredentials(ApiModel):
    auth_type: str = api_field("Auth Type", default="Service")
    service_account_info: str = api_field("Service Account Info", sensitive=True)


class SourceGoogleSheetsConfiguration(ApiModel):
    source_type: str = api_field("Source Type", alias="sourceType", default="google-sheets")
    row_batch_size: int | None = api_field("Row Batch Size", default=None)
    spreadsheet_id: str = api_field("Spreadsheet ID")
    credentials: GoogleSheetsCredentials = api_field(
        "Credentials",
        default_factory=GoogleSheetsCredentials,
    )


class SourceGoogleSheets(SourceResource):
    configuration: SourceGoogleSheetsConfiguration = api_field(
        "Connection configuration",
        default_factory=SourceGoogleSheetsConfiguration,
    )


# HubSpot


class HubspotCredentials(ApiModel):
    credentials_title: str = api_field("Credentials Title", default="Private App Credentials")
    access_token: str = api_field("Access Token", sensitive=True)


class SourceHubspotConfiguration(ApiModel):
    source_type: str = api_field("Source Type", alias="sourceType", default="hubspot")
    start_date: str = api_field("Start Date")
    credentials: HubspotCredentials = api_field(
        "Credentials",
        default_factory=HubspotCredentials,
    )


class SourceHubspot(SourceResource):
    configuration: SourceHubspotConfiguration = api_field(
        "Connection configuration",
        default_factory=SourceHubspotConfiguration,
    )


# Pipedrive


class PipedriveAuthorization(ApiModel):
    auth_type: str = api_field("Auth Type", default="Token")
    api_token: str = api_field("API Token", sensitive=True)


class SourcePipedriveConfiguration(ApiModel):
    source_type: str = api_field("Source Type", alias="sourceType", default="pipedrive")
    replication_start_date: str = api_field("Replication Start Date")
    authorization: PipedriveAuthorization = api_field(
        "Authorization",
        default_factory=PipedriveAuthorization,
    )


class SourcePipedrive(SourceResource):
    # Pipedrive is the one source that accepts an omitted workspace.
    workspace_id: str | None = api_field("Workspace ID", alias="workspaceId", default=None)
    configuration: SourcePipedriveConfiguration = api_field(
        "Connection configuration",
        default_factory=SourcePipedriveConfiguration,
    )


# Shopify


class ShopifyCredentials(ApiModel):
    auth_method: str = api_field("Auth Method", default="api_password")
    api_password: str = api_field("API Password", sensitive=True)


class SourceShopifyConfiguration(ApiModel):
    source_type: str = api_field("Source Type", alias="sourceType", default="shopify")
    start_date: str = api_field("Start Date")
    shop: str = api_field("Shop")
    credentials: ShopifyCredentials = api_field(
        "Credentials",
        default_factory=ShopifyCredentials,
    )


class SourceShopify(SourceResource):
    configuration: SourceShopifyConfiguration = api_field(
        "Connection configuration",
        default_factory=SourceShopifyConfiguration,
    )


# Stripe


class SourceStripeConfiguration(ApiModel):
    source_type: str = api_field("Source Type", alias="sourceType", default="stripe")
    start_date: str = api_field("Start Date")
    lookback_window_days: int | None = api_field("Lookback Window Days", default=None)
    slice_range: int | None = api_field("Slice Range", default=None)
    client_secret: str = api_field("Client Secret", sensitive=True)
    account_id: str = api_field("Account ID")


class SourceStripe(SourceResource):
    configuration: SourceStripeConfiguration = api_field(
        "Connection configuration",
        default_factory=SourceStripeConfiguration,
    )


# Zendesk Support


class ZendeskSupportCredentials(ApiModel):
    credentials: str = api_field("Credentials", default="api_token")
    email: str = api_field("Email")
    api_token: str = api_field("Api Token", sensitive=True)


class SourceZendeskSupportConfiguration(ApiModel):
    source_type: str = api_field("Source Type", alias="sourceType", default="zendesk-support")
    start_date: str = api_field("Start Date")
    ignore_pagination: bool | None = api_field("Ignore Pagination", default=None)
    subdomain: str = api_field("Subdomain")
    credentials: ZendeskSupportCredentials = api_field(
        "Credentials",
        default_factory=ZendeskSupportCredentials,
    )


class SourceZendeskSupport(SourceResource):
    configuration: SourceZendeskSupportConfiguration = api_field(
        "Connection configuration",
        default_factory=SourceZendeskSupportConfiguration,
    )


# Descriptors

SOURCE_AMPLITUDE = ResourceDescriptor(
    name="source_amplitude",
    path=constants.SOURCES_PATH,
    model=SourceAmplitude,
    update_capability=UpdateCapability.UPDATABLE,
)
SOURCE_FACEBOOK_MARKETING = ResourceDescriptor(
    name="source_facebook_marketing",
    path=constants.SOURCES_PATH,
    model=SourceFacebookMarketing,
    update_capability=UpdateCapability.UNSUPPORTED,
)
SOURCE_FRESHDESK = ResourceDescriptor(
    name="source_freshdesk",
    path=constants.SOURCES_PATH,
    model=SourceFreshdesk,
    update_capability=UpdateCapability.UNSUPPORTED,
)
SOURCE_GOOGLE_ANALYTICS_V4 = ResourceDescriptor(
    name="source_google_analytics_v4",
    path=constants.SOURCES_PATH,
    model=SourceGoogleAnalyticsV4,
    update_capability=UpdateCapability.UPDATABLE,
)
SOURCE_GOOGLE_SHEETS = ResourceDescriptor(
    name="source_google_sheets",
    path=constants.SOURCES_PATH,
    model=SourceGoogleSheets,
    update_capability=UpdateCapability.UNSUPPORTED,
)
SOURCE_HUBSPOT = ResourceDescriptor(
    name="source_hubspot",
    path=constants.SOURCES_PATH,
    model=SourceHubspot,
    update_capability=UpdateCapability.READ_ONLY_UPDATE,
)
SOURCE_PIPEDRIVE = ResourceDescriptor(
    name="source_pipedrive",
    path=constants.SOURCES_PATH,
    model=SourcePipedrive,
    update_capability=UpdateCapability.UPDATABLE,
)
SOURCE_SHOPIFY = ResourceDescriptor(
    name="source_shopify",
    path=constants.SOURCES_PATH,
    model=SourceShopify,
    update_capability=UpdateCapability.UNSUPPORTED,
)
SOURCE_STRIPE = ResourceDescriptor(
    name="source_stripe",
    path=constants.SOURCES_PATH,
    model=SourceStripe,
    update_capability=UpdateCapability.UNSUPPORTED,
)
SOURCE_ZENDESK_SUPPORT = ResourceDescriptor(
    name="source_zendesk_support",
    path=constants.SOURCES_PATH,
    model=SourceZendeskSupport,
    update_capability=UpdateCapability.READ_ONLY_UPDATE,
)

SOURCE_DESCRIPTORS: list[ResourceDescriptor] = [
    SOURCE_AMPLITUDE,
    SOURCE_FACEBOOK_MARKETING,
    SOURCE_FRESHDESK,
    SOURCE_GOOGLE_ANALYTICS_V4,
    SOURCE_GOOGLE_SHEETS,
    SOURCE_HUBSPOT,
    SOURCE_PIPEDRIVE,
    SOURCE_SHOPIFY,
    SOURCE_STRIPE,
    SOURCE_ZENDESK_SUPPORT,
]
"""All supported source kinds."""
