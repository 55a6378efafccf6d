"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from biteqube.adapters.chatbase_client import HttpxChatbaseClient
from biteqube.adapters.huggingface_client import HttpxHuggingFaceClient
from biteqube.adapters.mealdb_client import HttpxMealDbClient
from biteqube.adapters.stripe_checkout_client import StripeCheckoutClient
from biteqube.adapters.supabase_auth_client import SupabaseAuthClient
from biteqube.adapters.supabase_community_recipe_repository import (
    SupabaseCommunityRecipeRepository,
)
from biteqube.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from biteqube.adapters.supabase_saved_recipe_repository import (
    SupabaseSavedRecipeRepository,
)
from biteqube.adapters.supabase_search_history_repository import (
    SupabaseSearchHistoryRepository,
)
from biteqube.adapters.supabase_shopping_repository import SupabaseShoppingRepository
from biteqube.adapters.supabase_stats_repository import SupabaseStatsRepository
from biteqube.adapters.supabase_user_repository import SupabaseUserRepository
from biteqube.adapters.supabase_visitor_repository import SupabaseVisitorRepository
from biteqube.config import Settings, is_configured
from biteqube.services.auth import AuthService
from biteqube.services.billing import BillingService
from biteqube.services.chat import ChatService
from biteqube.services.cookbook import CookbookService
from biteqube.services.history import SearchHistoryService
from biteqube.services.profile import ProfileService
from biteqube.services.realtime import ChangeFeed
from biteqube.services.recipes import RecipeService
from biteqube.services.scan import ScanService
from biteqube.services.search import SearchService
from biteqube.services.shopping import ShoppingService
from biteqube.services.stats import StatsService
from biteqube.services.vision import VisionService
from biteqube.services.visitors import VisitorService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    change_feed: ChangeFeed
    auth_service: AuthService
    profile_service: ProfileService
    stats_service: StatsService
    recipe_service: RecipeService
    search_service: SearchService
    history_service: SearchHistoryService
    scan_service: ScanService
    cookbook_service: CookbookService
    shopping_service: ShoppingService
    chat_service: ChatService
    billing_service: BillingService
    visitor_service: VisitorService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    anon_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    change_feed = ChangeFeed()

    mealdb_client = HttpxMealDbClient.create(resolved_settings.mealdb_base_url)
    classifier = None
    if is_configured(resolved_settings.huggingface_api_key):
        classifier = HttpxHuggingFaceClient.create(
            api_key=resolved_settings.huggingface_api_key,
            model=resolved_settings.huggingface_model,
            base_url=resolved_settings.huggingface_base_url,
        )
    chat_client = None
    if is_configured(resolved_settings.chatbase_api_key) and is_configured(
        resolved_settings.chatbase_chatbot_id
    ):
        chat_client = HttpxChatbaseClient.create(
            api_key=resolved_settings.chatbase_api_key,
            chatbot_id=resolved_settings.chatbase_chatbot_id,
            base_url=resolved_settings.chatbase_base_url,
        )
    stripe_client = None
    if is_configured(resolved_settings.stripe_secret_key):
        stripe_client = StripeCheckoutClient.create(
            resolved_settings.stripe_secret_key
        )

    auth_client = SupabaseAuthClient(
        public_client=anon_client, admin_client=supabase_client
    )
    stats_service = StatsService(SupabaseStatsRepository(supabase_client))
    recipe_service = RecipeService(
        mealdb=mealdb_client,
        recipes=SupabaseRecipeRepository(supabase_client),
        community=SupabaseCommunityRecipeRepository(supabase_client),
    )
    history_service = SearchHistoryService(
        SupabaseSearchHistoryRepository(supabase_client)
    )

    async def close_resources() -> None:
        await mealdb_client.close()
        for client in (classifier, chat_client):
            if client is not None:
                await client.close()

    return AppContainer(
        settings=resolved_settings,
        change_feed=change_feed,
        auth_service=AuthService(auth_client, resolved_settings.public_origin),
        profile_service=ProfileService(
            auth_client=auth_client,
            users=SupabaseUserRepository(supabase_client),
            stats_service=stats_service,
        ),
        stats_service=stats_service,
        recipe_service=recipe_service,
        search_service=SearchService(recipe_service, history_service),
        history_service=history_service,
        scan_service=ScanService(
            vision_service=VisionService(classifier),
            recipe_service=recipe_service,
            stats_service=stats_service,
        ),
        cookbook_service=CookbookService(
            repository=SupabaseSavedRecipeRepository(supabase_client),
            recipe_service=recipe_service,
            publisher=change_feed,
        ),
        shopping_service=ShoppingService(
            repository=SupabaseShoppingRepository(supabase_client),
            publisher=change_feed,
        ),
        chat_service=ChatService(chat_client),
        billing_service=BillingService(
            client=stripe_client, default_origin=resolved_settings.public_origin
        ),
        visitor_service=VisitorService(SupabaseVisitorRepository(supabase_client)),
        close_resources=close_resources,
    )
