from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from auditlog.registry import auditlog
from .models import User, ShoppingList, ShoppingItem, ListShare

# Register models with auditlog for security audit trail
# This tracks all create, update, and delete operations on these models
auditlog.register(User, exclude_fields=['password', 'last_login'])
auditlog.register(ShoppingList, exclude_fields=['created_at', 'updated_at'])
auditlog.register(ShoppingItem, exclude_fields=['created_at', 'updated_at'])
auditlog.register(ListShare, exclude_fields=['created_at'])


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ("email", "username", "name", "is_staff", "date_joined")
    search_fields = ("email", "username", "name")
    fieldsets = DjangoUserAdmin.fieldsets + (
        ("Profile", {"fields": ("name",)}),
    )


class ShoppingItemInline(admin.TabularInline):
    model = ShoppingItem
    extra = 0
    fields = ("name", "quantity", "unit", "checked")


class ListShareInline(admin.TabularInline):
    model = ListShare
    extra = 0
    fields = ("invitee_email", "invitee_user", "status", "created_at", "accepted_at")
    # Status only changes through sharing and reconciliation
    readonly_fields = fields
    can_delete = True

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(ShoppingList)
class ShoppingListAdmin(admin.ModelAdmin):
    list_display = ("name", "owner", "created_at", "updated_at")
    list_select_related = ("owner",)
    search_fields = ("name", "owner__email")
    inlines = [ShoppingItemInline, ListShareInline]

    def get_readonly_fields(self, request, obj=None):
        # Owner is fixed once the list exists
        if obj is None:
            return ("created_at", "updated_at")
        return ("owner", "created_at", "updated_at")


@admin.register(ListShare)
class ListShareAdmin(admin.ModelAdmin):
    list_display = ("shopping_list", "invitee_email", "invitee_user", "status", "created_at", "accepted_at")
    list_filter = ("status", "created_at")
    list_select_related = ("shopping_list", "invitee_user")
    search_fields = ("invitee_email", "shopping_list__name")
    readonly_fields = ("shopping_list", "inviter", "invitee_email", "invitee_user", "role", "status",
                       "created_at", "accepted_at")

    def has_add_permission(self, request):
        return False
