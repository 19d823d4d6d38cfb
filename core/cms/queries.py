# =============================================================================
# GLOS-SITE GROQ Queries
# =============================================================================

# -----------------------------------------------------------------------------
# Site settings
# -----------------------------------------------------------------------------

SITE_SETTINGS_QUERY = """
*[_type == "siteSettings"][0] {
  "companyName": company.name,
  logo,
  slogan,
  tagline,
  contact,
  address,
  email,
  phone,
  social,
  footer,
  seo,
  businessHours
}
"""

PRICE_LIST_QUERY = """
*[_type == "siteSettings"][0] {
  "pdfIt": listinoPrezziPdfIt.asset->url,
  "pdfEn": listinoPrezziPdfEn.asset->url,
  "pdfEs": listinoPrezziPdfEs.asset->url
}
"""

# -----------------------------------------------------------------------------
# Navigation
# -----------------------------------------------------------------------------

NAVIGATION_QUERY = """
*[_type == "navigation" && _id == "mainNavigation"][0] {
  header[] {
    _key,
    label,
    href,
    children[] { _key, label, href }
  },
  footer
}
"""

# -----------------------------------------------------------------------------
# Pages
# -----------------------------------------------------------------------------

PAGE_BY_SLUG_QUERY = """
*[_type == "page" && slug.current == $slug][0] {
  _id,
  title,
  slug,
  description,
  seo,
  sections[] { _type, _key, ... }
}
"""

ALL_PAGES_QUERY = """
*[_type == "page"] | order(title.it asc) {
  _id,
  title,
  slug,
  description
}
"""

PAGE_SLUGS_QUERY = """
*[_type == "page" && defined(slug.current)].slug.current
"""

# -----------------------------------------------------------------------------
# Products
# -----------------------------------------------------------------------------

ALL_PRODUCTS_QUERY = """
*[_type == "product" && isActive == true] | order(sortOrder asc) {
  _id,
  name,
  slug,
  shortDescription,
  mainImage,
  category->{ _id, name, slug },
  price,
  isNew,
  isFeatured
}
"""

PRODUCT_BY_SLUG_QUERY = """
*[_type == "product" && slug.current == $slug][0] {
  _id,
  name,
  slug,
  shortDescription,
  fullDescription,
  mainImage,
  gallery,
  category->{ _id, name, slug },
  specifications,
  documents,
  price,
  isNew,
  isFeatured,
  relatedProducts[]->{ _id, name, slug, mainImage, shortDescription },
  seo
}
"""

FEATURED_PRODUCTS_QUERY = """
*[_type == "product" && isActive == true && isFeatured == true] | order(sortOrder asc)[0...6] {
  _id,
  name,
  slug,
  shortDescription,
  mainImage,
  category->{ name },
  isNew
}
"""

PRODUCTS_BY_CATEGORY_QUERY = """
*[_type == "product" && isActive == true && category._ref == $categoryId] | order(sortOrder asc) {
  _id,
  name,
  slug,
  shortDescription,
  mainImage,
  price,
  isNew
}
"""

PRODUCT_SLUGS_QUERY = """
*[_type == "product" && defined(slug.current)].slug.current
"""

# -----------------------------------------------------------------------------
# Categories
# -----------------------------------------------------------------------------

ALL_CATEGORIES_QUERY = """
*[_type == "productCategory" && isActive == true] | order(sortOrder asc) {
  _id,
  name,
  slug,
  description,
  image,
  "productCount": count(*[_type == "product" && references(^._id)])
}
"""

CATEGORY_BY_SLUG_QUERY = """
*[_type == "productCategory" && slug.current == $slug][0] {
  _id,
  name,
  slug,
  description,
  image,
  seo
}
"""

# -----------------------------------------------------------------------------
# Dealers
# -----------------------------------------------------------------------------

ALL_DEALERS_QUERY = """
*[_type == "dealer" && isActive == true] | order(name asc) {
  _id,
  name,
  type,
  description,
  logo,
  email,
  phone,
  website,
  openingHours,
  country,
  city,
  address,
  location,
  regions,
  certifications,
  youtubeVideo
}
"""

DEALERS_BY_REGION_QUERY = """
*[_type == "dealer" && isActive == true && $region in regions] | order(name asc) {
  _id,
  name,
  type,
  logo,
  address,
  city,
  country,
  phone,
  email,
  location
}
"""

# -----------------------------------------------------------------------------
# Testimonials
# -----------------------------------------------------------------------------

ALL_TESTIMONIALS_QUERY = """
*[_type == "testimonial" && isActive == true] | order(sortOrder asc) {
  _id,
  author,
  company,
  role,
  avatar,
  quote,
  rating
}
"""

FEATURED_TESTIMONIALS_QUERY = """
*[_type == "testimonial" && isActive == true && isFeatured == true] | order(sortOrder asc)[0...3] {
  _id,
  author,
  company,
  quote,
  rating
}
"""

# -----------------------------------------------------------------------------
# FAQ
# -----------------------------------------------------------------------------

ALL_FAQS_QUERY = """
*[_type == "faq" && isActive == true] | order(sortOrder asc) {
  _id,
  question,
  answer,
  category
}
"""

FAQS_BY_CATEGORY_QUERY = """
*[_type == "faq" && isActive == true && category == $category] | order(sortOrder asc) {
  _id,
  question,
  answer
}
"""
