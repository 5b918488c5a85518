from django.urls import path
from . import views

urlpatterns = [
    path('', views.index, name='index'),
    path('articles/<int:pk>/export/', views.export_article, name='export_article'),
    # scrape/ and process/ before <pk>/
    path('api/articles/', views.article_list, name='article_list'),
    path('api/articles/scrape/', views.trigger_scrape, name='trigger_scrape'),
    path('api/articles/process/<int:pk>/', views.process_article, name='process_article'),
    path('api/articles/<int:pk>/', views.article_detail, name='article_detail'),
]
