from django.urls import path

from . import admin_views, views

urlpatterns = [
    path('', views.home, name='home'),
    path('about/', views.about, name='about'),
    path('courses/', views.courses, name='courses'),
    path('calligraphy/', views.calligraphy, name='calligraphy'),
    path('teachers/', views.teachers, name='teachers'),
    path('news/', views.news_list, name='news_list'),
    path('news/<str:slug>/', views.news_detail, name='news_detail'),
    path('contact/', views.contact, name='contact'),
    path('pricing/', views.pricing, name='pricing'),
    path('test/', views.quiz_view, name='quiz'),
    path('login/', views.login_view, name='login'),
    path('logout/', views.logout_view, name='logout'),

    path('admin/', admin_views.dashboard, name='admin_dashboard'),
    path('admin/<slug:section>/', admin_views.editor_view, name='admin_editor'),
    path('admin/<slug:section>/<str:row_id>/delete/', admin_views.delete_view, name='admin_delete'),

    path('api/keepalive', views.keepalive, name='keepalive'),
]
