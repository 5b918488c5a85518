from django.db import models


class Article(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_COMPLETED = 'completed'
    STATUS_FAILED = 'failed'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_FAILED, 'Failed'),
    ]

    title = models.CharField(max_length=500)
    original_url = models.URLField(max_length=2048, unique=True, db_index=True)
    original_content = models.TextField(blank=True, default='')
    published_date = models.DateTimeField(null=True, blank=True)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES,
                              default=STATUS_PENDING, db_index=True)
    updated_content = models.TextField(blank=True, default='')
    references = models.JSONField(default=list, blank=True)
    error = models.CharField(max_length=500, blank=True, default='')

    # Set while a rewrite is in flight; never a status of its own.
    claimed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.title

    @property
    def is_completed(self):
        return self.status == self.STATUS_COMPLETED

    def to_dict(self):
        return {
            'id': self.pk,
            'title': self.title,
            'original_url': self.original_url,
            'original_content': self.original_content,
            'published_date': self.published_date.isoformat() if self.published_date else None,
            'status': self.status,
            'updated_content': self.updated_content,
            'references': self.references,
            'error': self.error or None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
