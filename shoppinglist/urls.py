from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    # allauth: login, logout, signup and Google sign-in
    path('accounts/', include('allauth.urls')),
    # App
    path('', include('shopping.urls')),
]

handler404 = "shopping.views.error_404"
handler500 = "shopping.views.error_500"
