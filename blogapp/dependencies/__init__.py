from blogapp.dependencies.dependencies import (
    AuthServiceDep,
    BlogListQuery,
    BlogQueryListDep,
    BlogRepoDep,
    CommentRepoDep,
    MediaServiceDep,
    OptionalUserDep,
    PageQuery,
    PageQueryDep,
    UserDBDep,
    UserRepoDep,
    get_auth_service,
    get_blog_list_query,
    get_blog_repository,
    get_comment_repository,
    get_current_user,
    get_media_service,
    get_optional_user,
    get_page_query,
    get_user_repository,
)

__all__ = [
    "AuthServiceDep",
    "BlogListQuery",
    "BlogQueryListDep",
    "BlogRepoDep",
    "CommentRepoDep",
    "MediaServiceDep",
    "OptionalUserDep",
    "PageQuery",
    "PageQueryDep",
    "UserDBDep",
    "UserRepoDep",
    "get_auth_service",
    "get_blog_list_query",
    "get_blog_repository",
    "get_comment_repository",
    "get_current_user",
    "get_media_service",
    "get_optional_user",
    "get_page_query",
    "get_user_repository",
]
