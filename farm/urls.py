from django.urls import path
from . import views

urlpatterns = [
    path('', views.dashboard, name='dashboard'),
    path('inventario/', views.inventory_list, name='inventory_list'),
    path('inventario/nuevo/', views.inventory_create, name='inventory_create'),
    path('inventario/<str:item_id>/editar/', views.inventory_edit, name='inventory_edit'),
    path('cultivos/', views.crop_list, name='crop_list'),
    path('cultivos/nuevo/', views.crop_create, name='crop_create'),
    path('cultivos/<str:crop_id>/editar/', views.crop_edit, name='crop_edit'),
    path('monitoreo/', views.monitoring, name='monitoring'),
    path('reportes/', views.reports, name='reports'),
    path('sync/', views.sync_status, name='sync_status'),
]
